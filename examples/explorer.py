# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#
#    EXAMPLES - Query Bitcoin SV block explorers
#
#    © 2023 November - 1200 Web Development <http://1200wd.com/>
#

from pprint import pprint
from bsvexplorer import *


# Chain information from Whatsonchain
srv = Explorer(network='main', api='woc')
print("Whatsonchain status:", srv.status())
print("\nChain info:")
pprint(srv.chain_info())
print("\nExchange rate:")
pprint(srv.exchange_rate())

# Same call on another provider
srv = Explorer(network='main', api='bitails')
print("\nLatest block according to Bitails:")
pprint(srv.block_latest())

# Operations a provider does not support raise an error, no request is made
try:
    srv.exchange_rate()
except UnsupportedOperationError as e:
    print("\nBitails:", e)

# Balance and unspent outputs of an address
address = '1HZwkjkeaoZfTSaJxDw6aKkxp45agDiEzN'
print("\nBalance of address %s:" % address)
pprint(srv.balance(address))
print("\nUTXO's:")
pprint(srv.utxos(address, limit=10))

# Download a testnet transaction as bitcoinlib Transaction object
txid = 'd3c7fbd3a4ca1cca789560348a86facb3bb21dcd75ed38e85235fb6a32802955'
srv = Explorer(network='testnet', api='woc')
t = srv.download_tx(txid)
t.info()
print("\nLocking script of first output:", srv.download_tx_out(txid, 0, format='hex'))
print("Script as assembly:", srv.get_output_data(txid, 0))

# Merkle proof on ElectrumX requires the block height
srv = Explorer(network='main', api='electrumx')
try:
    srv.merkle_proof(txid)
except ExplorerValidationError as e:
    print("\nElectrumX:", e)

# SEND Raw Transaction (inputs already spent, so the provider responds with an error)
rt = '010000000108004b4c0394a211d4ec0d344b70bf1e3b1ce1731d11d1d30279ab0c0f6d9fd7000000006c493046022100ab18a72f7' \
     '87e4c8ea5d2f983b99df28d27e13482b91fd6d48701c055af92f525022100d1c26b8a779896a53a026248388896501e724e46407f' \
     '14a4a1b6478d3293da24012103e428723c145e61c35c070da86faadaf0fab21939223a5e6ce3e1cfd76bad133dffffffff0240420' \
     'f00000000001976a914bbaeed8a02f64c9d40462d323d379b8f27ad9f1a88ac905d1818000000001976a914046858970a72d33817' \
     '474c0e24e530d78716fc9c88ac00000000'
print("\nSEND Raw Transaction:")
srv = Explorer(network='main', api='woc')
try:
    print("Transaction send, txid: %s" % srv.broadcast(rt))
except ExplorerResponseError as e:
    print("Transaction could not be send, error %s: %s" % (e.status_code, e))

# Use an API key to lift the request throttle
# srv = Explorer(network='main', api='woc', api_key='mainnet_0123456789abcdef')
# pprint(srv.utxos_by_script_hash_bulk(['995ea8d0f752f41cdd99bb9d54cb004709e04c7dc4088bcbbbb9ea5c390a43c3']))
