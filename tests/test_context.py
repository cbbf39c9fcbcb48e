import threading

import pytest

from bitgo import Context, ContextCancelledError, TransportError


class TestContext:
    def test_background_is_not_cancelled(self):
        ctx = Context.background()

        assert ctx.cancelled is False
        assert ctx.timeout is None
        ctx.check()

    def test_cancel_is_idempotent(self):
        ctx = Context()
        ctx.cancel()
        ctx.cancel()

        assert ctx.cancelled is True
        with pytest.raises(ContextCancelledError):
            ctx.check()

    def test_cancellation_is_a_transport_error(self):
        assert issubclass(ContextCancelledError, TransportError)

    def test_wait_wakes_on_cancel(self):
        ctx = Context()
        timer = threading.Timer(0.05, ctx.cancel)
        timer.start()
        try:
            assert ctx.wait(30) is True
        finally:
            timer.cancel()

    def test_wait_times_out(self):
        assert Context().wait(0) is False
