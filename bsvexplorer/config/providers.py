# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Service Provider definitions
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

import enum
from collections import namedtuple


class Provider(enum.Enum):
    BITAILS = 'bitails'
    BSVDIRECT = 'bsvdirect'
    ELECTRUMX = 'electrumx'
    WOC = 'woc'


ProviderDescriptor = namedtuple('ProviderDescriptor', ['name', 'main', 'test', 'stn', 'header_key'])

PROVIDERS = {
    Provider.BITAILS: ProviderDescriptor(
        'bitails', 'https://api.bitails.io/', 'https://test-api.bitails.io/', '', 'bitails-api-key'),
    Provider.BSVDIRECT: ProviderDescriptor(
        'bsvdirect', 'https://explora.bsv.direct/rest/', 'https://explora.bsv.direct/testrest/', '',
        'bsv.direct-api-key'),
    Provider.ELECTRUMX: ProviderDescriptor(
        'electrumx', 'https://api.bsv.direct/e5/', 'https://api.bsv.direct/test/e5/', '', 'bsv.direct-api-key'),
    Provider.WOC: ProviderDescriptor(
        'woc', 'https://api.whatsonchain.com/v1/bsv/main/', 'https://api.whatsonchain.com/v1/bsv/test/', '',
        'woc-api-key'),
}

# Transaction receipts are served from the explorer website, not from the API
WOC_RECEIPT_URLS = {
    'main': 'https://whatsonchain.com/receipt/',
    'test': 'https://test.whatsonchain.com/receipt/',
}
