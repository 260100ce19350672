# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    EXPLORER - Main block explorer connector
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

from bsvexplorer.main import *
from bsvexplorer.services.baseclient import BaseClient, ExplorerValidationError, UnsupportedOperationError
from bsvexplorer.services.routes import ROUTES, segment


_logger = logging.getLogger(__name__)


def _check_format(format, allowed):
    if format not in allowed:
        raise ExplorerValidationError("Unknown format '%s', use one of: %s" % (format, ', '.join(allowed)))


class Explorer(BaseClient):
    """
    Class to connect to a Bitcoin SV block explorer. Use to receive chain and block information, transactions,
    address and script hash balances, history and unspent outputs, or to broadcast a raw transaction.

    The same methods are available for every service provider. The request is translated to the provider's url
    conventions and the response is converted to a common format where possible. If a provider does not support
    an operation an UnsupportedOperationError is raised and no request is made.

    >>> srv = Explorer('testnet', api='woc')
    >>> srv.base_url
    'https://api.whatsonchain.com/v1/bsv/test/'

    """

    def __init__(self, network=DEFAULT_NETWORK, api=DEFAULT_PROVIDER, api_key=None, timeout=TIMEOUT_REQUESTS,
                 user_agent=None, cache=SERVICE_CACHING_ENABLED, url=None, throttle_threshold=None, session=None):
        """
        Create an explorer object for the specified network and service provider.

        :param network: Network: main, mainnet, livenet, test, testnet or stn
        :type network: str
        :param api: Service provider: bitails, bsvdirect, electrumx or woc. Default is bitails
        :type api: str, Provider
        :param api_key: API key of service provider. Send in provider specific header and disables throttling
        :type api_key: str
        :param timeout: Timeout for web requests in seconds. Leave empty to use default from config settings
        :type timeout: int
        :param user_agent: User-Agent header to send with every request
        :type user_agent: str
        :param cache: Serve identical GET requests from an in-memory cache. Default is True
        :type cache: bool
        :param url: Override service provider base url
        :type url: str
        :param throttle_threshold: Minimum interval between requests in milliseconds. Default is 0 with an API key and THROTTLE_THRESHOLD without
        :type throttle_threshold: int
        :param session: Requests session to use, a new session is created if not provided
        :type session: requests.Session
        """
        super(Explorer, self).__init__(network, api, api_key, timeout, user_agent, cache, url, throttle_threshold,
                                       session)
        _logger.info("Explorer for provider %s on %s network, url %s" %
                     (self.descriptor.name, self.network, self.base_url))

    def __repr__(self):
        return "<Explorer(%s, %s)>" % (self.descriptor.name, self.network)

    def supports(self, operation):
        """
        Check if selected service provider supports given operation

        >>> Explorer(api='woc').supports('exchange_rate')
        True
        >>> Explorer(api='bitails').supports('exchange_rate')
        False

        :param operation: Operation name, i.e. 'balance' or 'merkle_proof'
        :type operation: str

        :return bool:
        """
        return self.provider in ROUTES.get(operation, {})

    def _dispatch(self, operation, **params):
        try:
            route = ROUTES[operation][self.provider]
        except KeyError:
            raise UnsupportedOperationError(operation, self.provider)
        params.setdefault('network', self.network)
        if route.validate:
            route.validate(params)
        if route.via:
            payload = self._dispatch(route.via, **route.via_params(params))
        else:
            if callable(route.path):
                path = route.path(params)
            else:
                path = route.path.format(**{k: segment(v) if isinstance(v, (TYPE_TEXT, int)) else v
                                            for k, v in params.items()})
            variables = route.query(params) if route.query else None
            post_data = route.body(params) if route.body else None
            payload = self.request(path, variables, method=route.method, response=route.response,
                                   post_data=post_data)
        if route.reshape:
            return route.reshape(self, payload, params)
        return payload

    # Network and chain information

    def status(self):
        """
        Simple endpoint to show API server is up and running

        :return dict, str:
        """
        return self._dispatch('status')

    def stats(self, block=None):
        """
        Get network statistics, or for Whatsonchain the statistics of a single block.

        :param block: Block height (int) or block hash (str), only used by woc
        :type block: int, str

        :return dict:
        """
        return self._dispatch('stats', block=block)

    def miner_stats(self, days=30):
        """
        Get block statistics per miner

        :param days: Period in days, must be 1 or 30
        :type days: int

        :return list:
        """
        if days not in (1, 30):
            raise ExplorerValidationError("Days must be 1 or 30")
        return self._dispatch('miner_stats', days=days)

    def chain_info(self):
        """
        Get various state info of the chain for the selected network.

        :return dict:
        """
        return self._dispatch('chain_info')

    def chain_tips(self):
        return self._dispatch('chain_tips')

    def circulating_supply(self):
        return self._dispatch('circulating_supply')

    def exchange_rate(self):
        """
        Get BSV exchange rate in USD

        :return dict:
        """
        return self._dispatch('exchange_rate')

    # Blocks

    def block_hash(self, hash, format='json', notxdetails=True):
        """
        Get block details by block hash

        :param hash: Block hash
        :type hash: str
        :param format: Response format for bsvdirect: json or hex
        :type format: str
        :param notxdetails: Do not include transaction details, only used by bsvdirect
        :type notxdetails: bool

        :return dict:
        """
        _check_format(format, ['json', 'hex'])
        return self._dispatch('block_hash', hash=hash, format=format, notxdetails=notxdetails)

    def block_height(self, height):
        """
        Get block details by block height

        :param height: Block height
        :type height: int

        :return dict:
        """
        return self._dispatch('block_height', height=height)

    def block_latest(self):
        return self._dispatch('block_latest')

    def block_count(self, miner_id=''):
        """
        Get number of blocks, optionally filtered by miner

        :param miner_id: Miner ID
        :type miner_id: str

        :return int, dict:
        """
        return self._dispatch('block_count', miner_id=miner_id)

    def block_list(self, height_or_hash, page=1, skip=0, limit=100, sort='height', direction='asc', miner_id=''):
        """
        Get list of blocks starting at given height, or for Whatsonchain a page of transactions of a block with
        more than 1000 transactions.

        :param height_or_hash: Block height or hash to start from
        :type height_or_hash: int, str
        :param page: Page number, used by woc
        :type page: int
        :param skip: Number of blocks to skip
        :type skip: int
        :param limit: Maximum number of blocks to return. Default is 100
        :type limit: int
        :param sort: Sort field. Default is height
        :type sort: str
        :param direction: Sort direction asc or desc
        :type direction: str
        :param miner_id: Only return blocks mined by this miner
        :type miner_id: str

        :return list:
        """
        if direction not in ('asc', 'desc'):
            raise ExplorerValidationError("Direction must be asc or desc")
        return self._dispatch('block_list', height_or_hash=height_or_hash, page=page, skip=skip,
                              limit=limit or 100, sort=sort, direction=direction, miner_id=miner_id)

    def block_transactions(self, hash, from_index=0, limit=100, page=1):
        """
        Get the transactions of a block

        :param hash: Block hash
        :type hash: str
        :param from_index: Index of first transaction to return
        :type from_index: int
        :param limit: Maximum number of transactions to return. Default is 100
        :type limit: int
        :param page: Page number, used by woc
        :type page: int

        :return list:
        """
        return self._dispatch('block_transactions', hash=hash, from_index=from_index, limit=limit or 100,
                              page=page)

    def block_tag_histogram(self, period='24h', from_time=0, to_time=100, interval='1h'):
        """
        Get tag statistics of blocks in a period

        :param period: Period: 1h, 24h or 7d
        :type period: str
        :param from_time: Start timestamp
        :type from_time: int
        :param to_time: End timestamp
        :type to_time: int
        :param interval: Histogram interval
        :type interval: str

        :return list:
        """
        return self._dispatch('block_tag_histogram', period=period, from_time=from_time, to_time=to_time,
                              interval=interval)

    def block_mining_histogram(self, period='24h', from_time=0, to_time=100, interval='1h'):
        return self._dispatch('block_mining_histogram', period=period, from_time=from_time, to_time=to_time,
                              interval=interval)

    def block_props_histogram(self, period='24h', from_time=0, to_time=100):
        return self._dispatch('block_props_histogram', period=period, from_time=from_time, to_time=to_time)

    # Transactions

    def tx_hash(self, hash, format='json'):
        """
        Get transaction details by transaction ID.

        With format 'json' the provider's transaction details are returned. For all other formats the raw
        transaction is downloaded, see :func:`download_tx`.

        :param hash: Transaction ID
        :type hash: str
        :param format: Output format: json, bsv, bin or hex
        :type format: str

        :return dict, Transaction, bytes, str:
        """
        _check_format(format, TRANSACTION_FORMATS)
        if format != 'json':
            return self.download_tx(hash, format)
        return self._dispatch('tx_hash', hash=hash, format=format)

    def download_tx(self, hash, format='bsv'):
        """
        Download raw transaction and convert to requested format

        :param hash: Transaction ID
        :type hash: str
        :param format: Output format: bsv (bitcoinlib Transaction), bin (bytes), hex or json
        :type format: str

        :return Transaction, bytes, str, dict:
        """
        _check_format(format, TRANSACTION_FORMATS)
        return self._dispatch('download_tx', hash=hash, format=format)

    def download_tx_in(self, hash, index, format='bsv'):
        """
        Download the unlocking script of a transaction input

        :param hash: Transaction ID
        :type hash: str
        :param index: Index of the input
        :type index: int
        :param format: Output format: bsv (bitcoinlib Script), bin (bytes), hex or json
        :type format: str

        :return Script, bytes, str, dict:
        """
        _check_format(format, TRANSACTION_FORMATS)
        return self._dispatch('download_tx_in', hash=hash, index=index, format=format)

    def download_tx_out(self, hash, index, format='bsv'):
        """
        Download the locking script of a transaction output

        :param hash: Transaction ID
        :type hash: str
        :param index: Index of the output
        :type index: int
        :param format: Output format: bsv (bitcoinlib Script), bin (bytes), hex or json
        :type format: str

        :return Script, bytes, str, dict:
        """
        _check_format(format, TRANSACTION_FORMATS)
        return self._dispatch('download_tx_out', hash=hash, index=index, format=format)

    def receipt_pdf(self, hash):
        """
        Download transaction receipt in PDF format

        :param hash: Transaction ID
        :type hash: str

        :return bytes:
        """
        return self._dispatch('receipt_pdf', hash=hash)

    def broadcast(self, txhex, format='hex'):
        """
        Broadcast a raw transaction.

        Use format 'bin' to upload the transaction as multipart binary data if the provider supports it, for other
        providers the transaction is posted as hexadecimal string.

        :param txhex: Raw transaction as hexadecimal string or bytes
        :type txhex: str, bytes
        :param format: Submission format: hex or bin
        :type format: str

        :return str, dict: Transaction ID or provider response
        """
        _check_format(format, BROADCAST_FORMATS)
        if isinstance(txhex, (bytes, bytearray)):
            rawtx = bytes(txhex)
            txhex = rawtx.hex()
        else:
            try:
                rawtx = bytes.fromhex(txhex)
            except (TypeError, ValueError):
                raise ExplorerValidationError("Raw transaction must be a hexadecimal string or bytes")
        if format == 'bin' and self.supports('broadcast_multipart'):
            return self._dispatch('broadcast_multipart', rawtx=rawtx)
        return self._dispatch('broadcast', txhex=txhex)

    def decode_tx(self, txhex):
        """
        Let the service provider decode a raw transaction

        :param txhex: Raw transaction as hexadecimal string
        :type txhex: str

        :return dict:
        """
        return self._dispatch('decode_tx', txhex=txhex)

    def bulk_tx_details(self, txids):
        """
        Get details of multiple transactions in a single request. Maximum of 20 transactions per request.

        :param txids: List of transaction IDs
        :type txids: list of str

        :return list:
        """
        return self._dispatch('bulk_tx_details', txids=txids)

    def get_output_data_chunk(self, hash, output_index, chunk_index, format='bsv'):
        """
        Get a single chunk (command) of a transaction output locking script.

        :param hash: Transaction ID
        :type hash: str
        :param output_index: Index of the output
        :type output_index: int
        :param chunk_index: Index of the script command
        :type chunk_index: int
        :param format: Output format: bsv (bytes or op code integer) or hex
        :type format: str

        :return bytes, int, str:
        """
        _check_format(format, ['bsv', 'hex'])
        return self._dispatch('get_output_data_chunk', hash=hash, output_index=output_index,
                              chunk_index=chunk_index, format=format)

    def get_output_data(self, hash, output_index):
        """
        Get data of a transaction output. Providers without output data endpoint return the locking script in
        assembly format.

        :param hash: Transaction ID
        :type hash: str
        :param output_index: Index of the output
        :type output_index: int

        :return str:
        """
        return self._dispatch('get_output_data', hash=hash, output_index=output_index)

    def get_outputs_data(self, hash, from_index, to_index):
        """
        Get data of a range of transaction outputs, from from_index up to but not including to_index

        :return list:
        """
        if from_index > to_index:
            raise ExplorerValidationError("From index %d is larger than to index %d" % (from_index, to_index))
        return self._dispatch('get_outputs_data', hash=hash, from_index=from_index, to_index=to_index)

    def merkle_proof(self, hash, tsc=True, height=None):
        """
        Get merkle branch of a confirmed transaction

        :param hash: Transaction ID
        :type hash: str
        :param tsc: Return proof in TSC format. Default is True
        :type tsc: bool
        :param height: Block height of transaction, required for electrumx
        :type height: int

        :return dict, list:
        """
        return self._dispatch('merkle_proof', hash=hash, tsc=tsc, height=height)

    # Mempool

    def mempool_info(self):
        return self._dispatch('mempool_info')

    def mempool_txs(self, script_hash=None):
        """
        Get list of transaction IDs in the mempool. ElectrumX only lists mempool transactions of a script hash.

        :param script_hash: Script hash, required for electrumx
        :type script_hash: str

        :return list:
        """
        return self._dispatch('mempool_txs', script_hash=script_hash)

    # Addresses

    def address_info(self, address):
        return self._dispatch('address_info', address=address)

    def balance(self, address):
        """
        Get confirmed and unconfirmed balance of address

        :param address: Address string
        :type address: str

        :return dict:
        """
        return self._dispatch('balance', address=address)

    def history(self, address, pgkey='', limit=100, pagination=True, pagesize=10, page=1):
        """
        Get confirmed and unconfirmed transactions of address

        :param address: Address string
        :type address: str
        :param pgkey: Pagination key from previous response, used by bitails
        :type pgkey: str
        :param limit: Maximum number of transactions, used by bitails
        :type limit: int
        :param pagination: Use pagination, used by electrumx
        :type pagination: bool
        :param pagesize: Page size, used by electrumx
        :type pagesize: int
        :param page: Page number, used by electrumx
        :type page: int

        :return list, dict:
        """
        return self._dispatch('history', address=address, key=address, pgkey=pgkey, limit=limit or 100,
                              pagination=pagination, pagesize=pagesize, page=page)

    def utxos(self, address, from_index=0, limit=100):
        """
        Get ordered list of unspent outputs (UTXO's) of address

        :param address: Address string
        :type address: str
        :param from_index: Index of first UTXO to return, used by bitails
        :type from_index: int
        :param limit: Maximum number of UTXO's, used by bitails
        :type limit: int

        :return list:
        """
        return self._dispatch('utxos', address=address, from_index=from_index, limit=limit or 100)

    def is_unspent(self, outpoints, checkmempool=True, format='json'):
        """
        Get unspent status of outpoints

        :param outpoints: Outpoint or list of outpoints as 'txid-output_n' strings
        :type outpoints: str, list of str
        :param checkmempool: Also check mempool. Default is True
        :type checkmempool: bool
        :param format: Response format: json or hex
        :type format: str

        :return dict:
        """
        _check_format(format or 'json', ['json', 'hex'])
        return self._dispatch('is_unspent', outpoints=outpoints, checkmempool=checkmempool, format=format or 'json')

    # Script hashes

    def balance_script_hash(self, script_hash):
        """
        Get balance of script hash

        :param script_hash: Sha256 hash of the locking script as hexadecimal string
        :type script_hash: str

        :return dict:
        """
        return self._dispatch('balance_script_hash', script_hash=script_hash)

    def history_by_script_hash(self, script_hash, pgkey='', limit=100, pagination=True, pagesize=100, page=1):
        """
        Get confirmed and unconfirmed transactions of script hash. Parameters are the same as for :func:`history`

        :return list, dict:
        """
        return self._dispatch('history_by_script_hash', script_hash=script_hash, key=script_hash, pgkey=pgkey,
                              limit=limit or 100, pagination=pagination, pagesize=pagesize, page=page)

    def details_script_hash(self, script_hash):
        return self._dispatch('details_script_hash', script_hash=script_hash)

    def utxos_by_script_hash(self, script_hash, from_index=0, limit=100, format='json'):
        """
        Get ordered list of unspent outputs of script hash

        :param script_hash: Sha256 hash of the locking script as hexadecimal string
        :type script_hash: str
        :param from_index: Index of first UTXO to return, used by bitails
        :type from_index: int
        :param limit: Maximum number of UTXO's, used by bitails
        :type limit: int
        :param format: Response format for bsvdirect: json or hex
        :type format: str

        :return list:
        """
        _check_format(format or 'json', ['json', 'hex'])
        return self._dispatch('utxos_by_script_hash', script_hash=script_hash, from_index=from_index,
                              limit=limit or 100, format=format or 'json')

    def utxos_by_script_hash_bulk(self, script_hashes, from_index=0, limit=100):
        """
        Get unspent outputs of a list of script hashes in a single request. Whatsonchain accepts a maximum of 20
        script hashes per request.

        :param script_hashes: List of script hashes
        :type script_hashes: list of str
        :param from_index: Index of first UTXO to return, used by bitails
        :type from_index: int
        :param limit: Maximum number of UTXO's, used by bitails
        :type limit: int

        :return list:
        """
        return self._dispatch('utxos_by_script_hash_bulk', script_hashes=script_hashes, from_index=from_index,
                              limit=limit or 100)

    # Search

    def search(self, q, type='all', from_index=None, from_time=None, to_time=None, limit=10):
        """
        Search for transactions, blocks, addresses or script hashes

        :param q: Search query
        :type q: str
        :param type: Search type: all, ops, tx, block, scripthash or address. Default is all
        :type type: str
        :param from_index: Index of first result, used by bitails
        :type from_index: int
        :param from_time: Start timestamp, used by bitails
        :type from_time: int
        :param to_time: End timestamp, used by bitails
        :type to_time: int
        :param limit: Maximum number of results. Default is 10
        :type limit: int

        :return list, dict:
        """
        type = type or 'all'
        if type not in ('all', 'ops', 'tx', 'block', 'scripthash', 'address'):
            raise ExplorerValidationError("Unknown search type %s" % type)
        return self._dispatch('search', q=q, type=type, from_index=from_index, from_time=from_time,
                              to_time=to_time, limit=limit or 10)
