"""
Tests for the bitgo-consolidate and bitgo-utxo command-line tools.
"""

import io
import logging

import requests

from bitgo import ConsolidateParams
from bitgo.cli import consolidate, utxo
from fakes import make_response, query_of


class TestConsolidateArgs:
    def test_defaults_send_target_and_limit_only(self):
        args = consolidate.parse_args(['--wallet', 'w1'])

        assert args.host == 'http://0.0.0.0:3080'
        assert args.coin == 'btc'
        assert args.max_iter == 1
        assert consolidate.build_params(args).model_dump(by_alias=True, exclude_none=True) == {'numUnspentsToMake': 1, 'limit': 25}

    def test_amounts_are_converted_to_satoshis(self):
        args = consolidate.parse_args([
            '--passphrase', 'secret',
            '--min-value', '0.0001',
            '--max-value', '0.5',
            '--fee-rate', '20000',
            '--enforce-min-confirms-for-change',
        ])

        params = consolidate.build_params(args)

        assert params.wallet_passphrase == 'secret'
        assert params.min_value == 10000
        assert params.max_value == 50000000
        assert params.fee_rate == 20000
        assert params.enforce_min_confirms_for_change is True
        assert params.min_confirms is None


class TestConsolidateRun:
    def test_prints_each_txid(self, client, session, ctx):
        session.add(make_response(200, {'txid': 'aaa'}), make_response(200, {'txid': 'bbb'}))
        out = io.StringIO()

        code = consolidate.run(client, ctx, 'w1', ConsolidateParams(), 2, out)

        assert code == 0
        assert out.getvalue() == 'aaa\nbbb\n'

    def test_api_error_exits_non_zero(self, client, session, ctx, caplog):
        session.add(make_response(400, {'error': 'no unspents to consolidate'}))
        out = io.StringIO()

        with caplog.at_level(logging.ERROR, logger='bitgo.cli'):
            code = consolidate.run(client, ctx, 'w1', ConsolidateParams(), 3, out)

        assert code == 1
        assert out.getvalue() == ''
        assert len(session.sent) == 1
        assert '400: no unspents to consolidate' in caplog.text

    def test_transport_error_exits_non_zero(self, client, session, ctx):
        session.add(requests.ConnectionError('connection refused'))

        assert consolidate.run(client, ctx, 'w1', ConsolidateParams(), 1, io.StringIO()) == 1

    def test_stops_quietly_when_cancelled(self, client, session, ctx):
        ctx.cancel()
        out = io.StringIO()

        code = consolidate.run(client, ctx, 'w1', ConsolidateParams(), 5, out)

        assert code == 0
        assert session.sent == []


class TestUtxoArgs:
    def test_only_positive_filters_are_sent(self):
        args = utxo.parse_args(['--wallet', 'w1', '--min-size', '0.001', '--min-confirms', '2'])

        assert utxo.build_query(args) == {'minValue': '100000', 'minConfirms': '2'}
        assert args.wait == 15

    def test_prev_id_resumes_listing(self):
        args = utxo.parse_args(['--prev-id', 'abc', '--max-size', '1', '--min-height', '500000'])

        assert utxo.build_query(args) == {
            'prevId': 'abc',
            'maxValue': '100000000',
            'minHeight': '500000',
        }


class TestUtxoRun:
    def test_prints_values_in_bitcoins(self, client, session, ctx):
        session.add(
            make_response(200, {'unspents': [{'value': 1000000}, {'value': 1}], 'nextBatchPrevId': 'abc'}),
            make_response(200, {'unspents': [{'value': 250000}]}),
        )
        out = io.StringIO()

        code = utxo.run(client, ctx, 'w1', {}, 0, out)

        assert code == 0
        assert out.getvalue() == '0.01000000\n0.00000001\n0.00250000\n'

    def test_retries_from_failed_page(self, client, session, ctx):
        session.add(
            make_response(200, {'unspents': [{'value': 1}], 'nextBatchPrevId': 'abc'}),
            make_response(503, 'server is overloaded'),
            requests.Timeout('read timed out'),
            make_response(200, {'unspents': [{'value': 2}]}),
        )
        query = {'minConfirms': '1'}
        out = io.StringIO()

        code = utxo.run(client, ctx, 'w1', query, 0, out)

        assert code == 0
        assert out.getvalue() == '0.00000001\n0.00000002\n'
        assert len(session.sent) == 4
        assert [query_of(r) for r in session.sent[1:]] == [[('minConfirms', '1'), ('prevId', 'abc')]] * 3

    def test_stops_when_cancelled_after_failure(self, client, session, ctx):
        def fail_and_cancel(request):
            ctx.cancel()
            return make_response(500, '')

        session.add(fail_and_cancel)

        assert utxo.run(client, ctx, 'w1', {}, 3600, io.StringIO()) == 0
        assert len(session.sent) == 1
