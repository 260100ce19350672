# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    NETWORK class reader
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


_logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """
    Network Exception class
    """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def network_resolve(network):
    """
    Resolve a network name or one of its synonyms to the network key used in the provider definitions.

    >>> network_resolve('livenet')
    'main'
    >>> network_resolve('testnet')
    'test'

    :param network: Network name: main, mainnet, livenet, test, testnet or stn
    :type network: str

    :return str: main, test or stn
    """
    if not isinstance(network, TYPE_TEXT):
        raise NetworkError("Network name must be a string, not %s" % type(network).__name__)
    try:
        return NETWORK_SYNONYMS[network.lower()]
    except KeyError:
        raise NetworkError("Network %s not supported, use one of: %s" %
                           (network, ', '.join(NETWORK_SYNONYMS.keys())))
