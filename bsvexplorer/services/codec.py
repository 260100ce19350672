# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Codec - convert raw transactions and scripts to the requested output format
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
Thin layer on top of the bitcoinlib Transaction and Script classes. Bitcoin SV transactions use the legacy
serialization format, so they are parsed as non-strict legacy Bitcoin transactions.

Supported formats:

* bsv: bitcoinlib Transaction or Script object
* bin: raw bytes
* hex: hexadecimal string
* json: dictionary
"""

from bitcoinlib.transactions import Transaction
from bitcoinlib.scripts import Script
from bitcoinlib.config.opcodes import opcodenames
from bsvexplorer.main import *


_logger = logging.getLogger(__name__)

CODEC_NETWORKS = {
    'main': 'bitcoin',
    'test': 'testnet',
    'stn': 'testnet',
}


def _to_bytes(raw):
    if isinstance(raw, bytes):
        return raw
    if isinstance(raw, bytearray):
        return bytes(raw)
    return bytes.fromhex(raw)


def transaction_parse(raw, network='main'):
    """
    Parse a raw transaction in bytes or hexadecimal format

    :param raw: Raw transaction
    :type raw: bytes, str
    :param network: Network key: main, test or stn
    :type network: str

    :return Transaction:
    """
    return Transaction.parse_bytes(_to_bytes(raw), strict=False, network=CODEC_NETWORKS.get(network, 'bitcoin'))


def transaction_as(raw, format='bsv', network='main'):
    """
    Convert a raw transaction to requested format. A hexadecimal string requested as hex is returned unchanged.

    :param raw: Raw transaction in bytes or hexadecimal format
    :type raw: bytes, str
    :param format: Output format: bsv, bin, hex or json
    :type format: str
    :param network: Network key: main, test or stn
    :type network: str

    :return Transaction, bytes, str, dict:
    """
    if format == 'hex':
        return raw if isinstance(raw, TYPE_TEXT) else _to_bytes(raw).hex()
    if format == 'bin':
        return _to_bytes(raw)
    t = transaction_parse(raw, network)
    if format == 'json':
        return t.as_dict()
    return t


def script_asm(script):
    """
    Return script as assembly string. Data pushes are shown as hexadecimal strings, op codes by name.

    >>> script_asm(Script.parse_hex('76a914af8e14a2cecd715c363b3a72b55b59a31e2acac988ac'))
    'OP_DUP OP_HASH160 af8e14a2cecd715c363b3a72b55b59a31e2acac9 OP_EQUALVERIFY OP_CHECKSIG'

    :param script: Script object
    :type script: Script

    :return str:
    """
    items = []
    for cmd in script.commands:
        if isinstance(cmd, int):
            items.append(opcodenames.get(cmd, 'OP_UNKNOWN_%d' % cmd))
        else:
            items.append(bytes(cmd).hex())
    return ' '.join(items)


def script_chunk(script, chunk_index, format='bsv'):
    """
    Get a single command from a script. Data pushes are returned as bytes and op codes as integers, or both as
    hexadecimal string if format is hex.

    :param script: Script object
    :type script: Script
    :param chunk_index: Index of script command
    :type chunk_index: int
    :param format: Output format: bsv or hex
    :type format: str

    :return bytes, int, str:
    """
    cmd = script.commands[chunk_index]
    if format == 'hex':
        return bytes([cmd]).hex() if isinstance(cmd, int) else bytes(cmd).hex()
    return cmd


def script_as(raw, format='bsv'):
    """
    Convert a raw script to requested format

    :param raw: Raw script in bytes or hexadecimal format
    :type raw: bytes, str
    :param format: Output format: bsv, bin, hex or json
    :type format: str

    :return Script, bytes, str, dict:
    """
    raw = _to_bytes(raw)
    if format == 'bin':
        return raw
    if format == 'hex':
        return raw.hex()
    script = Script.parse_bytes(raw, strict=False)
    if format == 'json':
        return {
            'hex': raw.hex(),
            'asm': script_asm(script),
            'commands': [c if isinstance(c, int) else bytes(c).hex() for c in script.commands],
        }
    return script
