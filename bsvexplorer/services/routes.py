# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Routes - Service provider url paths and response conversions per operation
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

"""
Routing table for all Explorer operations.

ROUTES maps an operation name to a dictionary of Provider: Route. A provider missing from this dictionary does not
support the operation.

A Route has the following fields:

* path: url path template filled with the call parameters using str.format, or a function(params) returning the path
* method: get, post or multipart
* response: expected response type json, text or bytes
* reshape: function(explorer, payload, params) which converts the response to the returned value
* body: function(params) returning the data to post
* validate: function(params) which raises an ExplorerValidationError before any request is made
* via: name of another operation which provides the payload instead of a request
* via_params: function(params) returning the parameters for the 'via' operation
* query: function(params) returning a list of (name, value) url query variables, urlencoded by the client

Values placed in url path templates are quoted, so a parameter can never add path segments or query variables.
"""

import json
from collections import namedtuple
from urllib.parse import quote
from bsvexplorer.main import *
from bsvexplorer.config.providers import Provider, WOC_RECEIPT_URLS
from bsvexplorer.services.baseclient import ExplorerResponseError, ExplorerValidationError, \
    UnsupportedOperationError
from bsvexplorer.services.codec import transaction_as, transaction_parse, script_as, script_asm, script_chunk
from bitcoinlib.scripts import Script


Route = namedtuple('Route', ['path', 'method', 'response', 'reshape', 'body', 'validate', 'via', 'via_params',
                             'query'],
                   defaults=['get', 'json', None, None, None, None, None, None])

BITAILS = Provider.BITAILS
BSVDIRECT = Provider.BSVDIRECT
ELECTRUMX = Provider.ELECTRUMX
WOC = Provider.WOC


def _bool(value):
    return 'true' if value else 'false'


# Response conversions

def electrumx_result(explorer, payload, params):
    """
    Unwrap ElectrumX response envelope {"msg": "success", "result": ...}
    """
    if not isinstance(payload, dict) or 'msg' not in payload:
        return payload
    if payload['msg'] != 'success':
        raise ExplorerResponseError(json.dumps(payload, separators=(',', ':')), payload=payload)
    return payload.get('result')


def electrumx_transaction(explorer, payload, params):
    return transaction_as(electrumx_result(explorer, payload, params), params['format'], explorer.network)


def bsvdirect_transaction_json(explorer, payload, params):
    tx = dict(payload)
    tx['tx'] = transaction_parse(payload['hex'], explorer.network)
    return tx


def transaction_format(explorer, payload, params):
    return transaction_as(payload, params['format'], explorer.network)


def script_format(explorer, payload, params):
    return script_as(payload, params['format'])


def input_script(explorer, t, params):
    if not 0 <= params['index'] < len(t.inputs):
        raise ExplorerValidationError("Transaction %s has no input %d" % (params['hash'], params['index']))
    return script_as(t.inputs[params['index']].unlocking_script, params['format'])


def output_script(explorer, t, params):
    if not 0 <= params['index'] < len(t.outputs):
        raise ExplorerValidationError("Transaction %s has no output %d" % (params['hash'], params['index']))
    return script_as(t.outputs[params['index']].lock_script, params['format'])


def output_chunk(explorer, script, params):
    if not 0 <= params['chunk_index'] < len(script.commands):
        raise ExplorerValidationError("Output %d of transaction %s has no chunk %d" %
                                      (params['output_index'], params['hash'], params['chunk_index']))
    return script_chunk(script, params['chunk_index'], params['format'])


def output_asm(explorer, script, params):
    return script_asm(script)


def outputs_asm(explorer, t, params):
    return [script_asm(Script.parse_bytes(o.lock_script, strict=False))
            for o in t.outputs[params['from_index']:params['to_index']]]


# Validations

def require_height(params):
    if params.get('height') is None:
        raise ExplorerValidationError("Specify block height of the transaction.")


def require_script_hash(params):
    if not params.get('script_hash'):
        raise ExplorerValidationError("Specify script hash to list mempool transactions.")


def require_block(params):
    if not isinstance(params.get('block'), (int, TYPE_TEXT)) or isinstance(params.get('block'), bool):
        raise ExplorerValidationError("Specify block height (int) or block hash (str).")


def require_receipt_network(params):
    if params['network'] not in WOC_RECEIPT_URLS:
        raise UnsupportedOperationError('receipt_pdf', WOC)


def max_bulk_items(field):
    def validate(params):
        items = params[field]
        if not isinstance(items, (list, tuple)):
            raise ExplorerValidationError("Please provide a list of %s" % field.replace('_', ' '))
        if len(items) > MAX_BULK_ITEMS:
            raise ExplorerValidationError("Array of max %d %s, %d provided" %
                                          (MAX_BULK_ITEMS, field.replace('_', ' '), len(items)))
    return validate


# Url paths and query variables

def segment(value):
    """
    Quote a value for use as a single url path segment

    >>> segment('a/b?c')
    'a%2Fb%3Fc'
    """
    return quote(str(value), safe='')


def query(*fields, optional=()):
    """
    Create a function which returns the url query variables of a route.

    Fields are query variable names, or tuples of (query variable name, parameter name) when these differ. Fields
    listed in optional are left out when the parameter is empty. Booleans are sent as 'true' or 'false'.

    >>> query('txid', ('height', 'block_height'))({'txid': 'ab', 'block_height': 10})
    [('txid', 'ab'), ('height', 10)]
    """
    def variables(params):
        items = []
        for field in fields:
            name, key = field if isinstance(field, tuple) else (field, field)
            value = params[key]
            if name in optional and not value:
                continue
            items.append((name, _bool(value) if isinstance(value, bool) else value))
        return items
    return variables


def _woc_stats_path(params):
    if isinstance(params['block'], int):
        return 'block/height/%d/stats' % params['block']
    return 'block/hash/%s/stats' % segment(params['block'])


def _bsvdirect_block_path(params):
    txdetails = 'notxdetails/' if params['notxdetails'] else ''
    return 'block/%s%s.%s' % (txdetails, segment(params['hash']), segment(params['format']))


def _bsvdirect_getutxos_path(params):
    outpoints = params['outpoints']
    if not isinstance(outpoints, (list, tuple)):
        outpoints = [outpoints]
    checkmempool = 'checkmempool/' if params['checkmempool'] else ''
    return 'getutxos/%s%s.%s' % (checkmempool, '/'.join(segment(o) for o in outpoints), segment(params['format']))


def _proof_path(params):
    return 'tx/%s/proof%s' % (segment(params['hash']), '/tsc' if params['tsc'] else '')


def _receipt_url(params):
    return WOC_RECEIPT_URLS[params['network']] + segment(params['hash'])


def _tx_bsv(params):
    return {'hash': params['hash'], 'format': 'bsv'}


def _output_bsv(params):
    return {'hash': params['hash'], 'index': params['output_index'], 'format': 'bsv'}


_history_query = query('pgkey', 'limit', optional=('pgkey', ))
_electrumx_history_query = query(('address', 'key'), 'pagination', 'pagesize', 'page')
_from_limit_query = query(('from', 'from_index'), 'limit')
_histogram_query = query(('fromTime', 'from_time'), ('toTime', 'to_time'), ('period', 'interval'))


def _electrumx_blockinfo(key):
    return Route('getblockinfo', reshape=electrumx_result, query=query(('height', key), ('cp_height', key)))


ROUTES = {
    # Network and chain information
    'status': {
        BITAILS: Route('network/stats'),
        BSVDIRECT: Route('chaininfo.json'),
        ELECTRUMX: Route('getcurrentblock', reshape=electrumx_result),
        WOC: Route('woc', response='text'),
    },
    'stats': {
        BITAILS: Route('network/stats'),
        WOC: Route(_woc_stats_path, validate=require_block),
    },
    'miner_stats': {
        WOC: Route('miner/blocks/stats', query=query('days')),
    },
    'chain_info': {
        BITAILS: Route('network/info'),
        BSVDIRECT: Route('chaininfo.json'),
        ELECTRUMX: Route('getcurrentblock', reshape=electrumx_result),
        WOC: Route('chain/info'),
    },
    'chain_tips': {
        WOC: Route('chain/tips'),
    },
    'circulating_supply': {
        WOC: Route('circulatingsupply'),
    },
    'exchange_rate': {
        WOC: Route('exchangerate'),
    },

    # Blocks
    'block_hash': {
        BITAILS: Route('block/{hash}'),
        BSVDIRECT: Route(_bsvdirect_block_path),
        ELECTRUMX: _electrumx_blockinfo('hash'),
        WOC: Route('block/hash/{hash}'),
    },
    'block_height': {
        BITAILS: Route('block/height/{height}'),
        ELECTRUMX: _electrumx_blockinfo('height'),
        WOC: Route('block/height/{height}'),
    },
    'block_latest': {
        BITAILS: Route('block/latest'),
        ELECTRUMX: Route('getcurrentblock', reshape=electrumx_result),
    },
    'block_count': {
        BITAILS: Route('block/count', query=query(('minerId', 'miner_id'))),
    },
    'block_list': {
        BITAILS: Route('block/list', query=query('skip', ('from', 'height_or_hash'), 'limit', 'sort', 'direction',
                                                 ('minerId', 'miner_id'))),
        ELECTRUMX: _electrumx_blockinfo('height_or_hash'),
        WOC: Route('block/hash/{height_or_hash}/page/{page}'),
    },
    'block_transactions': {
        BITAILS: Route('block/{hash}/transactions', query=_from_limit_query),
        ELECTRUMX: _electrumx_blockinfo('hash'),
        WOC: Route('block/hash/{hash}/page/{page}'),
    },
    'block_tag_histogram': {
        BITAILS: Route('block/stats/tag/{period}/histogramblock', query=_histogram_query),
    },
    'block_mining_histogram': {
        BITAILS: Route('block/stats/mining/{period}/histogramblock', query=_histogram_query),
    },
    'block_props_histogram': {
        BITAILS: Route('block/stats/props/{period}/histogramblock',
                       query=query(('fromTime', 'from_time'), ('toTime', 'to_time'))),
    },

    # Transactions
    'tx_hash': {
        BITAILS: Route('tx/{hash}'),
        BSVDIRECT: Route('tx/{hash}.json', reshape=bsvdirect_transaction_json),
        ELECTRUMX: Route('gettransaction', reshape=electrumx_transaction, query=query(('txid', 'hash'))),
        WOC: Route('tx/hash/{hash}'),
    },
    'download_tx': {
        BITAILS: Route('download/tx/{hash}', response='bytes', reshape=transaction_format),
        BSVDIRECT: Route('tx/{hash}.bin', response='bytes', reshape=transaction_format),
        ELECTRUMX: Route('gettransaction', reshape=electrumx_transaction, query=query(('txid', 'hash'))),
        WOC: Route('tx/{hash}/hex', response='text', reshape=transaction_format),
    },
    'download_tx_in': {
        BITAILS: Route('download/tx/{hash}/input/{index}', response='bytes', reshape=script_format),
        BSVDIRECT: Route(None, reshape=input_script, via='download_tx', via_params=_tx_bsv),
        ELECTRUMX: Route(None, reshape=input_script, via='download_tx', via_params=_tx_bsv),
        WOC: Route(None, reshape=input_script, via='download_tx', via_params=_tx_bsv),
    },
    'download_tx_out': {
        BITAILS: Route('download/tx/{hash}/output/{index}', response='bytes', reshape=script_format),
        BSVDIRECT: Route(None, reshape=output_script, via='download_tx', via_params=_tx_bsv),
        ELECTRUMX: Route(None, reshape=output_script, via='download_tx', via_params=_tx_bsv),
        WOC: Route(None, reshape=output_script, via='download_tx', via_params=_tx_bsv),
    },
    'receipt_pdf': {
        WOC: Route(_receipt_url, response='bytes', validate=require_receipt_network),
    },
    'broadcast': {
        BITAILS: Route('tx/broadcast', method='post', body=lambda p: {'raw': p['txhex']}),
        ELECTRUMX: Route('pushtx', method='post', body=lambda p: {'rawtx': p['txhex']}, reshape=electrumx_result),
        WOC: Route('tx/raw', method='post', body=lambda p: {'txhex': p['txhex']}),
    },
    'broadcast_multipart': {
        BITAILS: Route('tx/broadcast/multipart', method='multipart', body=lambda p: {'raw': p['rawtx']}),
    },
    'decode_tx': {
        BITAILS: Route('tx/decode', method='post', body=lambda p: {'txhex': p['txhex']}),
        WOC: Route('tx/decode', method='post', body=lambda p: {'txhex': p['txhex']}),
    },
    'bulk_tx_details': {
        WOC: Route('txs', method='post', body=lambda p: {'txids': list(p['txids'])},
                   validate=max_bulk_items('txids')),
    },
    'get_output_data_chunk': {
        BITAILS: Route('tx/{hash}/output/{output_index}'),
        BSVDIRECT: Route(None, reshape=output_chunk, via='download_tx_out', via_params=_output_bsv),
        ELECTRUMX: Route(None, reshape=output_chunk, via='download_tx_out', via_params=_output_bsv),
        WOC: Route(None, reshape=output_chunk, via='download_tx_out', via_params=_output_bsv),
    },
    'get_output_data': {
        BITAILS: Route('tx/{hash}/output/{output_index}'),
        BSVDIRECT: Route(None, reshape=output_asm, via='download_tx_out', via_params=_output_bsv),
        ELECTRUMX: Route(None, reshape=output_asm, via='download_tx_out', via_params=_output_bsv),
        WOC: Route(None, reshape=output_asm, via='download_tx_out', via_params=_output_bsv),
    },
    'get_outputs_data': {
        BITAILS: Route('tx/{hash}/outputs/{from_index}/{to_index}'),
        BSVDIRECT: Route(None, reshape=outputs_asm, via='download_tx', via_params=_tx_bsv),
        ELECTRUMX: Route(None, reshape=outputs_asm, via='download_tx', via_params=_tx_bsv),
        WOC: Route(None, reshape=outputs_asm, via='download_tx', via_params=_tx_bsv),
    },
    'merkle_proof': {
        BITAILS: Route(_proof_path),
        ELECTRUMX: Route('getmerkle', reshape=electrumx_result, validate=require_height,
                         query=query(('txid', 'hash'), 'height')),
        WOC: Route(_proof_path),
    },

    # Mempool
    'mempool_info': {
        BITAILS: Route('mempool'),
        BSVDIRECT: Route('mempool/info.json'),
        WOC: Route('mempool/info'),
    },
    'mempool_txs': {
        BITAILS: Route('mempool/transactions'),
        BSVDIRECT: Route('mempool/contents.json'),
        ELECTRUMX: Route('getmempooltx', reshape=electrumx_result, validate=require_script_hash,
                         query=query(('scripthash', 'script_hash'))),
        WOC: Route('mempool/raw'),
    },

    # Addresses
    'address_info': {
        BITAILS: Route('address/{address}/details'),
        WOC: Route('address/{address}/info'),
    },
    'balance': {
        BITAILS: Route('address/{address}/balance'),
        ELECTRUMX: Route('getbalance', reshape=electrumx_result, query=query('address')),
        WOC: Route('address/{address}/balance'),
    },
    'history': {
        BITAILS: Route('address/{address}/history', query=_history_query),
        ELECTRUMX: Route('listtransactions', reshape=electrumx_result, query=_electrumx_history_query),
        WOC: Route('address/{address}/history'),
    },
    'utxos': {
        BITAILS: Route('address/{address}/unspent', query=_from_limit_query),
        ELECTRUMX: Route('listunspent', reshape=electrumx_result, query=query('address')),
        WOC: Route('address/{address}/unspent'),
    },
    'is_unspent': {
        BSVDIRECT: Route(_bsvdirect_getutxos_path),
    },

    # Script hashes
    'balance_script_hash': {
        BITAILS: Route('scripthash/{script_hash}/balance'),
        ELECTRUMX: Route('getbalance', reshape=electrumx_result, query=query(('address', 'script_hash'))),
        WOC: Route('script/{script_hash}/balance'),
    },
    'history_by_script_hash': {
        BITAILS: Route('scripthash/{script_hash}/history', query=_history_query),
        ELECTRUMX: Route('listtransactions', reshape=electrumx_result, query=_electrumx_history_query),
        WOC: Route('script/{script_hash}/history'),
    },
    'details_script_hash': {
        BITAILS: Route('scripthash/{script_hash}/details'),
    },
    'utxos_by_script_hash': {
        BITAILS: Route('scripthash/{script_hash}/unspent', query=_from_limit_query),
        BSVDIRECT: Route('getutxos/{script_hash}.{format}'),
        ELECTRUMX: Route('listunspent', reshape=electrumx_result, query=query(('address', 'script_hash'))),
        WOC: Route('script/{script_hash}/unspent'),
    },
    'utxos_by_script_hash_bulk': {
        BITAILS: Route('scripthash/unspent/multi', method='post', query=_from_limit_query,
                       body=lambda p: {'scriptHashes': list(p['script_hashes'])}),
        WOC: Route('scripts/unspent', method='post', body=lambda p: {'scripts': list(p['script_hashes'])},
                   validate=max_bulk_items('script_hashes')),
    },

    # Search
    'search': {
        BITAILS: Route('search', query=query('type', 'q', 'limit', ('from', 'from_index'), ('fromTime', 'from_time'),
                                             ('toTime', 'to_time'), optional=('from', 'fromTime', 'toTime'))),
        WOC: Route('search/links', method='post', body=lambda p: {'query': p['q']}),
    },
}
