# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
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

from bsvexplorer.config.providers import Provider
from bsvexplorer.networks import NetworkError
from bsvexplorer.services.baseclient import ClientError, ExplorerConfigError, ExplorerValidationError, \
    ExplorerTransportError, ExplorerResponseError, UnsupportedOperationError
from bsvexplorer.services.explorer import Explorer

__all__ = ["Explorer", "Provider", "ClientError", "ExplorerConfigError", "ExplorerValidationError",
           "ExplorerTransportError", "ExplorerResponseError", "UnsupportedOperationError", "NetworkError"]
