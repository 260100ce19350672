# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    CONFIG - Configuration settings
#    © 2023 - 2024 March - 1200 Web Development <http://1200wd.com/>
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

import os
import configparser
from pathlib import Path

# General defaults
TYPE_TEXT = str
LOGLEVEL = 'WARNING'

# File locations
BSVEXPLORER_CONFIG_FILE = ''
BSVEXPLORER_INSTALL_DIR = Path(__file__).parents[1]
BSVEXPLORER_DATA_DIR = ''
BSVEXPLORER_LOG_FILE = ''

# Main
ENABLE_BSVEXPLORER_LOGGING = False

# Services
TIMEOUT_REQUESTS = 30
DEFAULT_PROVIDER = 'bitails'
DEFAULT_NETWORK = 'main'
MAX_BULK_ITEMS = 20
# Minimum interval in milliseconds between outbound requests without an API key
THROTTLE_THRESHOLD = 350

# Caching
SERVICE_CACHING_ENABLED = True
CACHE_EXPIRY_SECONDS = 300
CACHE_MAX_ENTRIES = 100

# Output formats
TRANSACTION_FORMATS = ['bsv', 'bin', 'hex', 'json']
BROADCAST_FORMATS = ['hex', 'bin']

NETWORK_SYNONYMS = {
    'main': 'main',
    'mainnet': 'main',
    'livenet': 'main',
    'test': 'test',
    'testnet': 'test',
    'stn': 'stn',
}


def read_config():
    config = configparser.ConfigParser()

    def config_get(section, var, fallback, is_boolean=False):
        try:
            if is_boolean:
                val = config.getboolean(section, var, fallback=fallback)
            else:
                val = config.get(section, var, fallback=fallback)
            return val
        except Exception:
            return fallback

    global BSVEXPLORER_CONFIG_FILE, BSVEXPLORER_DATA_DIR, BSVEXPLORER_LOG_FILE
    global LOGLEVEL, ENABLE_BSVEXPLORER_LOGGING
    global TIMEOUT_REQUESTS, DEFAULT_PROVIDER, DEFAULT_NETWORK, MAX_BULK_ITEMS, THROTTLE_THRESHOLD
    global SERVICE_CACHING_ENABLED, CACHE_EXPIRY_SECONDS, CACHE_MAX_ENTRIES

    # Read settings from configuration file provided in OS environment or ~/.bsvexplorer/ directory
    config_file_name = os.environ.get('BSVEXPLORER_CONFIG_FILE')
    if not config_file_name:
        BSVEXPLORER_CONFIG_FILE = Path('~/.bsvexplorer/config.ini').expanduser()
    else:
        BSVEXPLORER_CONFIG_FILE = Path(config_file_name)
        if not BSVEXPLORER_CONFIG_FILE.is_absolute():
            BSVEXPLORER_CONFIG_FILE = Path(Path.home(), '.bsvexplorer', BSVEXPLORER_CONFIG_FILE)
        if not BSVEXPLORER_CONFIG_FILE.exists():
            raise IOError('BsvExplorer configuration file not found: %s' % str(BSVEXPLORER_CONFIG_FILE))
    data = config.read(str(BSVEXPLORER_CONFIG_FILE))
    BSVEXPLORER_DATA_DIR = Path(config_get('locations', 'data_dir', fallback='~/.bsvexplorer')).expanduser()

    # Log settings
    ENABLE_BSVEXPLORER_LOGGING = config_get('logs', 'enable_logging', fallback=ENABLE_BSVEXPLORER_LOGGING,
                                            is_boolean=True)
    BSVEXPLORER_LOG_FILE = Path(BSVEXPLORER_DATA_DIR, config_get('logs', 'log_file', fallback='bsvexplorer.log'))
    LOGLEVEL = config_get('logs', 'loglevel', fallback=LOGLEVEL)

    # Service settings
    TIMEOUT_REQUESTS = int(config_get('common', 'timeout_requests', fallback=TIMEOUT_REQUESTS))
    DEFAULT_PROVIDER = config_get('common', 'default_provider', fallback=DEFAULT_PROVIDER)
    DEFAULT_NETWORK = config_get('common', 'default_network', fallback=DEFAULT_NETWORK)
    MAX_BULK_ITEMS = int(config_get('common', 'max_bulk_items', fallback=MAX_BULK_ITEMS))
    THROTTLE_THRESHOLD = int(config_get('common', 'throttle_threshold', fallback=THROTTLE_THRESHOLD))
    SERVICE_CACHING_ENABLED = config_get('common', 'service_caching_enabled', fallback=True, is_boolean=True)
    CACHE_EXPIRY_SECONDS = int(config_get('common', 'cache_expiry_seconds', fallback=CACHE_EXPIRY_SECONDS))
    CACHE_MAX_ENTRIES = int(config_get('common', 'cache_max_entries', fallback=CACHE_MAX_ENTRIES))

    if not data:
        return False
    return True


# Initialize library
read_config()
BSVEXPLORER_VERSION = Path(BSVEXPLORER_INSTALL_DIR, 'config/VERSION').open().read().strip()
