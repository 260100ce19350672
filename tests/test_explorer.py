# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Unit Tests for Explorer Class
#    © 2023 November - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import unittest
from urllib.parse import parse_qs, urlsplit
from bitcoinlib.transactions import Transaction
from bitcoinlib.scripts import Script
from bsvexplorer.services.explorer import *
from bsvexplorer.services.baseclient import ExplorerValidationError, ExplorerResponseError, \
    UnsupportedOperationError
from bsvexplorer.services.routes import ROUTES
from bsvexplorer.config.providers import Provider, PROVIDERS
from tests.test_custom import *


BITAILS = Provider.BITAILS
BSVDIRECT = Provider.BSVDIRECT
ELECTRUMX = Provider.ELECTRUMX
WOC = Provider.WOC

CALL_ARGS = {
    'status': {},
    'stats': {'block': 640000},
    'miner_stats': {'days': 1},
    'chain_info': {},
    'chain_tips': {},
    'circulating_supply': {},
    'exchange_rate': {},
    'block_hash': {'hash': BLOCK_HASH},
    'block_height': {'height': 640000},
    'block_latest': {},
    'block_count': {'miner_id': 'taal'},
    'block_list': {'height_or_hash': 640000},
    'block_transactions': {'hash': BLOCK_HASH, 'from_index': 10, 'limit': 20, 'page': 2},
    'block_tag_histogram': {},
    'block_mining_histogram': {},
    'block_props_histogram': {},
    'tx_hash': {'hash': TXID},
    'download_tx': {'hash': TXID},
    'download_tx_in': {'hash': TXID, 'index': 0},
    'download_tx_out': {'hash': TXID, 'index': 1},
    'receipt_pdf': {'hash': TXID},
    'broadcast': {'txhex': RAW_TX},
    'decode_tx': {'txhex': RAW_TX},
    'bulk_tx_details': {'txids': [TXID]},
    'get_output_data_chunk': {'hash': TXID, 'output_index': 0, 'chunk_index': 2},
    'get_output_data': {'hash': TXID, 'output_index': 0},
    'get_outputs_data': {'hash': TXID, 'from_index': 0, 'to_index': 2},
    'merkle_proof': {'hash': TXID, 'height': 1000631},
    'mempool_info': {},
    'mempool_txs': {'script_hash': SCRIPT_HASH},
    'address_info': {'address': ADDRESS},
    'balance': {'address': ADDRESS},
    'history': {'address': ADDRESS},
    'utxos': {'address': ADDRESS},
    'is_unspent': {'outpoints': [TXID + '-0', TXID + '-1']},
    'balance_script_hash': {'script_hash': SCRIPT_HASH},
    'history_by_script_hash': {'script_hash': SCRIPT_HASH},
    'details_script_hash': {'script_hash': SCRIPT_HASH},
    'utxos_by_script_hash': {'script_hash': SCRIPT_HASH},
    'utxos_by_script_hash_bulk': {'script_hashes': [SCRIPT_HASH]},
    'search': {'q': 'hello'},
}

TX_DOWNLOAD_PATH = {
    BITAILS: 'download/tx/%s' % TXID,
    BSVDIRECT: 'tx/%s.bin' % TXID,
    ELECTRUMX: 'gettransaction?txid=%s' % TXID,
    WOC: 'tx/%s/hex' % TXID,
}

# Expected request per operation and provider: url path and method
EXPECTED_REQUESTS = {
    'status': {BITAILS: 'network/stats', BSVDIRECT: 'chaininfo.json', ELECTRUMX: 'getcurrentblock', WOC: 'woc'},
    'stats': {BITAILS: 'network/stats', WOC: 'block/height/640000/stats'},
    'miner_stats': {WOC: 'miner/blocks/stats?days=1'},
    'chain_info': {BITAILS: 'network/info', BSVDIRECT: 'chaininfo.json', ELECTRUMX: 'getcurrentblock',
                   WOC: 'chain/info'},
    'chain_tips': {WOC: 'chain/tips'},
    'circulating_supply': {WOC: 'circulatingsupply'},
    'exchange_rate': {WOC: 'exchangerate'},
    'block_hash': {
        BITAILS: 'block/%s' % BLOCK_HASH,
        BSVDIRECT: 'block/notxdetails/%s.json' % BLOCK_HASH,
        ELECTRUMX: 'getblockinfo?height=%s&cp_height=%s' % (BLOCK_HASH, BLOCK_HASH),
        WOC: 'block/hash/%s' % BLOCK_HASH,
    },
    'block_height': {BITAILS: 'block/height/640000', ELECTRUMX: 'getblockinfo?height=640000&cp_height=640000',
                     WOC: 'block/height/640000'},
    'block_latest': {BITAILS: 'block/latest', ELECTRUMX: 'getcurrentblock'},
    'block_count': {BITAILS: 'block/count?minerId=taal'},
    'block_list': {
        BITAILS: 'block/list?skip=0&from=640000&limit=100&sort=height&direction=asc&minerId=',
        ELECTRUMX: 'getblockinfo?height=640000&cp_height=640000',
        WOC: 'block/hash/640000/page/1',
    },
    'block_transactions': {
        BITAILS: 'block/%s/transactions?from=10&limit=20' % BLOCK_HASH,
        ELECTRUMX: 'getblockinfo?height=%s&cp_height=%s' % (BLOCK_HASH, BLOCK_HASH),
        WOC: 'block/hash/%s/page/2' % BLOCK_HASH,
    },
    'block_tag_histogram': {BITAILS: 'block/stats/tag/24h/histogramblock?fromTime=0&toTime=100&period=1h'},
    'block_mining_histogram': {BITAILS: 'block/stats/mining/24h/histogramblock?fromTime=0&toTime=100&period=1h'},
    'block_props_histogram': {BITAILS: 'block/stats/props/24h/histogramblock?fromTime=0&toTime=100'},
    'tx_hash': {
        BITAILS: 'tx/%s' % TXID,
        BSVDIRECT: 'tx/%s.json' % TXID,
        ELECTRUMX: 'gettransaction?txid=%s' % TXID,
        WOC: 'tx/hash/%s' % TXID,
    },
    'download_tx': TX_DOWNLOAD_PATH,
    'download_tx_in': {**TX_DOWNLOAD_PATH, BITAILS: 'download/tx/%s/input/0' % TXID},
    'download_tx_out': {**TX_DOWNLOAD_PATH, BITAILS: 'download/tx/%s/output/1' % TXID},
    'receipt_pdf': {WOC: 'https://whatsonchain.com/receipt/%s' % TXID},
    'broadcast': {BITAILS: ('tx/broadcast', 'POST'), ELECTRUMX: ('pushtx', 'POST'), WOC: ('tx/raw', 'POST')},
    'decode_tx': {BITAILS: ('tx/decode', 'POST'), WOC: ('tx/decode', 'POST')},
    'bulk_tx_details': {WOC: ('txs', 'POST')},
    'get_output_data_chunk': {**TX_DOWNLOAD_PATH, BITAILS: 'tx/%s/output/0' % TXID},
    'get_output_data': {**TX_DOWNLOAD_PATH, BITAILS: 'tx/%s/output/0' % TXID},
    'get_outputs_data': {**TX_DOWNLOAD_PATH, BITAILS: 'tx/%s/outputs/0/2' % TXID},
    'merkle_proof': {
        BITAILS: 'tx/%s/proof/tsc' % TXID,
        ELECTRUMX: 'getmerkle?txid=%s&height=1000631' % TXID,
        WOC: 'tx/%s/proof/tsc' % TXID,
    },
    'mempool_info': {BITAILS: 'mempool', BSVDIRECT: 'mempool/info.json', WOC: 'mempool/info'},
    'mempool_txs': {
        BITAILS: 'mempool/transactions',
        BSVDIRECT: 'mempool/contents.json',
        ELECTRUMX: 'getmempooltx?scripthash=%s' % SCRIPT_HASH,
        WOC: 'mempool/raw',
    },
    'address_info': {BITAILS: 'address/%s/details' % ADDRESS, WOC: 'address/%s/info' % ADDRESS},
    'balance': {
        BITAILS: 'address/%s/balance' % ADDRESS,
        ELECTRUMX: 'getbalance?address=%s' % ADDRESS,
        WOC: 'address/%s/balance' % ADDRESS,
    },
    'history': {
        BITAILS: 'address/%s/history?limit=100' % ADDRESS,
        ELECTRUMX: 'listtransactions?address=%s&pagination=true&pagesize=10&page=1' % ADDRESS,
        WOC: 'address/%s/history' % ADDRESS,
    },
    'utxos': {
        BITAILS: 'address/%s/unspent?from=0&limit=100' % ADDRESS,
        ELECTRUMX: 'listunspent?address=%s' % ADDRESS,
        WOC: 'address/%s/unspent' % ADDRESS,
    },
    'is_unspent': {BSVDIRECT: 'getutxos/checkmempool/%s-0/%s-1.json' % (TXID, TXID)},
    'balance_script_hash': {
        BITAILS: 'scripthash/%s/balance' % SCRIPT_HASH,
        ELECTRUMX: 'getbalance?address=%s' % SCRIPT_HASH,
        WOC: 'script/%s/balance' % SCRIPT_HASH,
    },
    'history_by_script_hash': {
        BITAILS: 'scripthash/%s/history?limit=100' % SCRIPT_HASH,
        ELECTRUMX: 'listtransactions?address=%s&pagination=true&pagesize=100&page=1' % SCRIPT_HASH,
        WOC: 'script/%s/history' % SCRIPT_HASH,
    },
    'details_script_hash': {BITAILS: 'scripthash/%s/details' % SCRIPT_HASH},
    'utxos_by_script_hash': {
        BITAILS: 'scripthash/%s/unspent?from=0&limit=100' % SCRIPT_HASH,
        BSVDIRECT: 'getutxos/%s.json' % SCRIPT_HASH,
        ELECTRUMX: 'listunspent?address=%s' % SCRIPT_HASH,
        WOC: 'script/%s/unspent' % SCRIPT_HASH,
    },
    'utxos_by_script_hash_bulk': {
        BITAILS: ('scripthash/unspent/multi?from=0&limit=100', 'POST'),
        WOC: ('scripts/unspent', 'POST'),
    },
    'search': {BITAILS: 'search?type=all&q=hello&limit=10', WOC: ('search/links', 'POST')},
}

# Operations which need the raw transaction as response
RAW_TX_OPERATIONS = ['download_tx', 'download_tx_in', 'download_tx_out', 'get_output_data_chunk',
                     'get_output_data', 'get_outputs_data']


def raw_tx_content(provider):
    if provider in (BITAILS, BSVDIRECT):
        return bytes.fromhex(RAW_TX)
    if provider == ELECTRUMX:
        return {'msg': 'success', 'result': RAW_TX}
    return RAW_TX


def response_content(operation, provider):
    if provider == BITAILS:
        if operation in ('download_tx_in', 'download_tx_out'):
            return bytes.fromhex(LOCKING_SCRIPT_1)
        if operation == 'download_tx':
            return bytes.fromhex(RAW_TX)
        return b'{}'
    if operation in RAW_TX_OPERATIONS:
        return raw_tx_content(provider)
    if operation == 'tx_hash' and provider == BSVDIRECT:
        return {'txid': TXID, 'hex': RAW_TX}
    if operation == 'tx_hash' and provider == ELECTRUMX:
        return {'msg': 'success', 'result': RAW_TX}
    if operation == 'status' and provider == WOC:
        return 'Whats On Chain'
    return b'{}'


def explorer(provider, network='main', content=b'{}', status_code=200, **kwargs):
    session = StubSession(content, status_code)
    kwargs.setdefault('cache', False)
    kwargs.setdefault('throttle_threshold', 0)
    return Explorer(network, api=provider, session=session, **kwargs), session


class TestExplorerRouting(unittest.TestCase, CustomAssertions):

    def test_explorer_routing_table_covered(self):
        operations = set(ROUTES.keys()) - {'broadcast_multipart'}
        self.assertSetEqual(operations, set(EXPECTED_REQUESTS.keys()))
        self.assertSetEqual(operations, set(CALL_ARGS.keys()))
        for operation in operations:
            self.assertTrue(callable(getattr(Explorer, operation)), operation)
            self.assertSetEqual(set(ROUTES[operation].keys()), set(EXPECTED_REQUESTS[operation].keys()),
                                "Providers for %s" % operation)

    def test_explorer_routing_requests(self):
        for operation, expected_per_provider in EXPECTED_REQUESTS.items():
            for provider, expected in expected_per_provider.items():
                with self.subTest(operation=operation, provider=provider.value):
                    path, method = expected if isinstance(expected, tuple) else (expected, 'GET')
                    srv, session = explorer(provider, content=response_content(operation, provider))
                    getattr(srv, operation)(**CALL_ARGS[operation])
                    expected_url = path if path.startswith('https://') else srv.base_url + path
                    self.assertRequested(session, expected_url, method)

    def test_explorer_routing_unsupported(self):
        for operation in EXPECTED_REQUESTS:
            for provider in Provider:
                if provider in ROUTES[operation]:
                    continue
                with self.subTest(operation=operation, provider=provider.value):
                    srv, session = explorer(provider)
                    self.assertFalse(srv.supports(operation))
                    self.assertRaisesRegex(UnsupportedOperationError, "^%s Not implemented.$" % operation,
                                           getattr(srv, operation), **CALL_ARGS[operation])
                    self.assertEqual(session.requests, [])

    def test_explorer_routing_testnet(self):
        srv, session = explorer('woc', 'testnet')
        srv.balance(ADDRESS)
        self.assertRequested(session, 'https://api.whatsonchain.com/v1/bsv/test/address/%s/balance' % ADDRESS)

    def test_explorer_routing_receipt_testnet(self):
        srv, session = explorer('woc', 'test', content=b'%PDF-1.4')
        self.assertEqual(srv.receipt_pdf(TXID), b'%PDF-1.4')
        self.assertRequested(session, 'https://test.whatsonchain.com/receipt/%s' % TXID)

    def test_explorer_routing_history_pagination_key(self):
        srv, session = explorer('bitails')
        srv.history(ADDRESS, pgkey='abc123', limit=5)
        self.assertRequested(session, srv.base_url + 'address/%s/history?pgkey=abc123&limit=5' % ADDRESS)

    def test_explorer_routing_stats_block_hash(self):
        srv, session = explorer('woc')
        srv.stats(BLOCK_HASH)
        self.assertRequested(session, srv.base_url + 'block/hash/%s/stats' % BLOCK_HASH)

    def test_explorer_routing_bsvdirect_block_options(self):
        srv, session = explorer('bsvdirect', content='0100000000')
        srv.block_hash(BLOCK_HASH, format='hex', notxdetails=False)
        self.assertRequested(session, srv.base_url + 'block/%s.hex' % BLOCK_HASH)

    def test_explorer_routing_search_options(self):
        srv, session = explorer('bitails', content=[])
        srv.search('hello', type='tx', from_index=20, from_time=1600000000, to_time=1700000000, limit=5)
        self.assertRequested(session, srv.base_url + 'search?type=tx&q=hello&limit=5&from=20'
                                                     '&fromTime=1600000000&toTime=1700000000')

    def test_explorer_routing_query_reserved_characters(self):
        srv, session = explorer('bitails', content=[])
        srv.search('a&type=tx#x')
        self.assertRequested(session, srv.base_url + 'search?type=all&q=a%26type%3Dtx%23x&limit=10')
        variables = parse_qs(urlsplit(session.urls[0]).query)
        self.assertDictEqual(variables, {'type': ['all'], 'q': ['a&type=tx#x'], 'limit': ['10']})

        srv, session = explorer('bitails')
        srv.block_count(miner_id='taal pool&x=1')
        self.assertRequested(session, srv.base_url + 'block/count?minerId=taal+pool%26x%3D1')

    def test_explorer_routing_path_segments_quoted(self):
        srv, session = explorer('woc')
        srv.balance('a/b?c')
        self.assertRequested(session, srv.base_url + 'address/a%2Fb%3Fc/balance')

        srv, session = explorer('woc')
        srv.stats('00/../chain/info')
        self.assertRequested(session, srv.base_url + 'block/hash/00%2F..%2Fchain%2Finfo/stats')

        srv, session = explorer('bsvdirect', content=[])
        srv.is_unspent(['%s/0' % TXID, '%s/1' % TXID])
        self.assertRequested(session, srv.base_url + 'getutxos/checkmempool/%s%%2F0/%s%%2F1.json' % (TXID, TXID))

    def test_explorer_routing_receipt_stn(self):
        session = StubSession(b'%PDF-1.4')
        srv = Explorer('stn', 'woc', url='http://localhost:8080/v1/bsv/stn', session=session, cache=False)
        self.assertRaisesRegex(UnsupportedOperationError, "^receipt_pdf Not implemented.$", srv.receipt_pdf, TXID)
        self.assertEqual(session.requests, [])

    def test_explorer_routing_proof_without_tsc(self):
        srv, session = explorer('woc', content=[])
        srv.merkle_proof(TXID, tsc=False)
        self.assertRequested(session, srv.base_url + 'tx/%s/proof' % TXID)

    def test_explorer_routing_post_bodies(self):
        srv, session = explorer('woc', content=[])
        srv.search('hello')
        self.assertDictEqual(session.requests[0][2]['json'], {'query': 'hello'})
        srv.bulk_tx_details([TXID])
        self.assertDictEqual(session.requests[1][2]['json'], {'txids': [TXID]})
        srv.decode_tx(RAW_TX)
        self.assertDictEqual(session.requests[2][2]['json'], {'txhex': RAW_TX})

        srv, session = explorer('bitails', content=[])
        srv.utxos_by_script_hash_bulk([SCRIPT_HASH], from_index=5, limit=10)
        self.assertRequested(session, srv.base_url + 'scripthash/unspent/multi?from=5&limit=10', 'POST')
        self.assertDictEqual(session.requests[0][2]['json'], {'scriptHashes': [SCRIPT_HASH]})


class TestExplorerValidation(unittest.TestCase):

    def test_explorer_bulk_max_items(self):
        script_hashes = ['%064x' % i for i in range(21)]
        srv, session = explorer('woc', content=[])
        self.assertRaisesRegex(ExplorerValidationError, "Array of max 20", srv.utxos_by_script_hash_bulk,
                               script_hashes)
        self.assertEqual(session.requests, [])
        srv.utxos_by_script_hash_bulk(script_hashes[:20])
        self.assertEqual(len(session.requests), 1)
        self.assertEqual(len(session.requests[0][2]['json']['scripts']), 20)

    def test_explorer_bulk_max_items_txids(self):
        srv, session = explorer('woc', content=[])
        self.assertRaises(ExplorerValidationError, srv.bulk_tx_details, [TXID] * 21)
        self.assertRaisesRegex(ExplorerValidationError, "provide a list", srv.bulk_tx_details, TXID)
        self.assertEqual(session.requests, [])

    def test_explorer_bulk_bitails_no_limit(self):
        srv, session = explorer('bitails', content=[])
        srv.utxos_by_script_hash_bulk(['%064x' % i for i in range(21)])
        self.assertEqual(len(session.requests[0][2]['json']['scriptHashes']), 21)

    def test_explorer_merkle_proof_electrumx_height(self):
        srv, session = explorer('electrumx')
        self.assertRaisesRegex(ExplorerValidationError, "Specify block height", srv.merkle_proof, TXID)
        self.assertEqual(session.requests, [])

    def test_explorer_mempool_txs_electrumx_script_hash(self):
        srv, session = explorer('electrumx')
        self.assertRaises(ExplorerValidationError, srv.mempool_txs)
        self.assertEqual(session.requests, [])

    def test_explorer_miner_stats_days(self):
        srv, session = explorer('woc')
        self.assertRaisesRegex(ExplorerValidationError, "Days must be 1 or 30", srv.miner_stats, 7)
        self.assertEqual(session.requests, [])

    def test_explorer_stats_block_type(self):
        srv, session = explorer('woc')
        self.assertRaises(ExplorerValidationError, srv.stats)
        self.assertRaises(ExplorerValidationError, srv.stats, 1.5)
        self.assertEqual(session.requests, [])

    def test_explorer_unknown_formats(self):
        srv, session = explorer('woc')
        self.assertRaisesRegex(ExplorerValidationError, "Unknown format", srv.download_tx, TXID, 'xml')
        self.assertRaises(ExplorerValidationError, srv.broadcast, RAW_TX, 'json')
        self.assertRaises(ExplorerValidationError, srv.search, 'hello', 'unknown')
        self.assertRaises(ExplorerValidationError, srv.get_outputs_data, TXID, 3, 1)
        self.assertEqual(session.requests, [])

    def test_explorer_validation_error_is_value_error(self):
        srv, _ = explorer('woc')
        self.assertRaises(ValueError, srv.miner_stats, 2)


class TestExplorerTransactions(unittest.TestCase):

    def test_explorer_download_tx_hex_passthrough(self):
        srv, _ = explorer('woc', content=RAW_TX)
        self.assertEqual(srv.download_tx(TXID, 'hex'), RAW_TX)
        srv, _ = explorer('electrumx', content={'msg': 'success', 'result': RAW_TX})
        self.assertEqual(srv.download_tx(TXID, 'hex'), RAW_TX)

    def test_explorer_download_tx_formats(self):
        srv, _ = explorer('bitails', content=bytes.fromhex(RAW_TX))
        self.assertEqual(srv.download_tx(TXID, 'hex'), RAW_TX)
        self.assertEqual(srv.download_tx(TXID, 'bin'), bytes.fromhex(RAW_TX))
        t = srv.download_tx(TXID)
        self.assertIsInstance(t, Transaction)
        self.assertEqual(t.txid, TXID)
        self.assertEqual(len(t.outputs), 2)
        self.assertEqual(srv.download_tx(TXID, 'json')['txid'], TXID)

    def test_explorer_download_tx_bsvdirect(self):
        srv, session = explorer('bsvdirect', content=bytes.fromhex(RAW_TX))
        self.assertEqual(srv.download_tx(TXID, 'hex'), RAW_TX)
        self.assertEqual(session.urls[0], srv.base_url + 'tx/%s.bin' % TXID)

    def test_explorer_tx_hash_delegates_download(self):
        srv, session = explorer('woc', content=RAW_TX)
        self.assertEqual(srv.tx_hash(TXID, 'hex'), RAW_TX)
        self.assertEqual(session.urls, [srv.base_url + 'tx/%s/hex' % TXID])

    def test_explorer_tx_hash_bsvdirect(self):
        srv, _ = explorer('bsvdirect', content={'txid': TXID, 'hex': RAW_TX})
        tx = srv.tx_hash(TXID)
        self.assertEqual(tx['hex'], RAW_TX)
        self.assertEqual(tx['tx'].txid, TXID)

    def test_explorer_tx_hash_electrumx(self):
        srv, _ = explorer('electrumx', content={'msg': 'success', 'result': RAW_TX})
        self.assertEqual(srv.tx_hash(TXID)['txid'], TXID)

    def test_explorer_download_tx_in(self):
        srv, session = explorer('woc', content=RAW_TX)
        self.assertEqual(srv.download_tx_in(TXID, 0, 'hex'), UNLOCKING_SCRIPT)
        self.assertEqual(len(session.requests), 1)
        self.assertRaisesRegex(ExplorerValidationError, "has no input 1", srv.download_tx_in, TXID, 1)

    def test_explorer_download_tx_out(self):
        srv, _ = explorer('electrumx', content={'msg': 'success', 'result': RAW_TX})
        self.assertEqual(srv.download_tx_out(TXID, 1, 'hex'), LOCKING_SCRIPT_1)
        self.assertEqual(srv.download_tx_out(TXID, 0, 'bin'), bytes.fromhex(LOCKING_SCRIPT_0))
        self.assertIsInstance(srv.download_tx_out(TXID, 0), Script)
        self.assertRaisesRegex(ExplorerValidationError, "has no output 2", srv.download_tx_out, TXID, 2)

    def test_explorer_download_tx_out_bitails(self):
        srv, _ = explorer('bitails', content=bytes.fromhex(LOCKING_SCRIPT_0))
        script_dict = srv.download_tx_out(TXID, 0, 'json')
        self.assertEqual(script_dict['hex'], LOCKING_SCRIPT_0)
        self.assertEqual(script_dict['asm'], 'OP_DUP OP_HASH160 af8e14a2cecd715c363b3a72b55b59a31e2acac9 '
                                             'OP_EQUALVERIFY OP_CHECKSIG')

    def test_explorer_output_data(self):
        srv, session = explorer('woc', content=RAW_TX)
        self.assertEqual(srv.get_output_data_chunk(TXID, 0, 2),
                         bytes.fromhex('af8e14a2cecd715c363b3a72b55b59a31e2acac9'))
        self.assertEqual(srv.get_output_data_chunk(TXID, 0, 0, 'hex'), '76')
        self.assertRaisesRegex(ExplorerValidationError, "has no chunk 5", srv.get_output_data_chunk, TXID, 0, 5)
        self.assertEqual(srv.get_output_data(TXID, 1),
                         'OP_DUP OP_HASH160 f0d34949650af161e7cb3f0325a1a88330751650 OP_EQUALVERIFY OP_CHECKSIG')
        self.assertEqual(len(srv.get_outputs_data(TXID, 0, 2)), 2)
        self.assertEqual(len(srv.get_outputs_data(TXID, 1, 5)), 1)

    def test_explorer_broadcast_hex(self):
        srv, session = explorer('bitails', content={'txid': TXID})
        self.assertEqual(srv.broadcast(RAW_TX), {'txid': TXID})
        self.assertDictEqual(session.requests[0][2]['json'], {'raw': RAW_TX})

    def test_explorer_broadcast_bytes(self):
        srv, session = explorer('woc', content='"%s"' % TXID)
        self.assertEqual(srv.broadcast(bytes.fromhex(RAW_TX)), TXID)
        self.assertDictEqual(session.requests[0][2]['json'], {'txhex': RAW_TX})

    def test_explorer_broadcast_multipart(self):
        srv, session = explorer('bitails', content={'txid': TXID})
        srv.broadcast(RAW_TX, 'bin')
        method, url, kwargs = session.requests[0]
        self.assertEqual(method, 'POST')
        self.assertEqual(url, srv.base_url + 'tx/broadcast/multipart')
        self.assertEqual(kwargs['files']['raw'][1], bytes.fromhex(RAW_TX))
        self.assertNotIn('json', kwargs)

    def test_explorer_broadcast_bin_fallback_hex(self):
        srv, session = explorer('electrumx', content={'msg': 'success', 'result': TXID})
        self.assertEqual(srv.broadcast(RAW_TX, 'bin'), TXID)
        self.assertEqual(session.urls, [srv.base_url + 'pushtx'])
        self.assertDictEqual(session.requests[0][2]['json'], {'rawtx': RAW_TX})

    def test_explorer_broadcast_invalid(self):
        srv, session = explorer('woc')
        self.assertRaisesRegex(ExplorerValidationError, "hexadecimal string or bytes", srv.broadcast, 'xyz')
        srv, session = explorer('bsvdirect')
        self.assertRaisesRegex(UnsupportedOperationError, "broadcast Not implemented.", srv.broadcast, RAW_TX)
        self.assertEqual(session.requests, [])


class TestExplorerElectrumX(unittest.TestCase):

    def test_explorer_electrumx_unwrap(self):
        srv, _ = explorer('electrumx', content={'msg': 'success', 'result': {'confirmed': 1000, 'unconfirmed': 0}})
        self.assertDictEqual(srv.balance(ADDRESS), {'confirmed': 1000, 'unconfirmed': 0})

    def test_explorer_electrumx_error_envelope(self):
        srv, _ = explorer('electrumx', content={'msg': 'failed', 'error': 'unknown address'})
        self.assertRaisesRegex(ExplorerResponseError, 'unknown address', srv.balance, ADDRESS)

    def test_explorer_electrumx_plain_response(self):
        srv, _ = explorer('electrumx', content=[1, 2])
        self.assertListEqual(srv.utxos(ADDRESS), [1, 2])


class TestExplorerMisc(unittest.TestCase):

    def test_explorer_repr(self):
        srv, _ = explorer('woc', 'testnet')
        self.assertEqual(repr(srv), '<Explorer(woc, test)>')

    def test_explorer_woc_status_text(self):
        srv, _ = explorer('woc', content='Whats On Chain')
        self.assertEqual(srv.status(), 'Whats On Chain')

    def test_explorer_provider_descriptors(self):
        for provider in Provider:
            srv, _ = explorer(provider)
            self.assertEqual(srv.descriptor, PROVIDERS[provider])
            self.assertEqual(srv.base_url, PROVIDERS[provider].main)


if __name__ == '__main__':
    unittest.main()
