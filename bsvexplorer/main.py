# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    MAIN - Load configs and initialize logging
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

# Do not remove any of the imports below, used by other files
import logging
from logging.handlers import RotatingFileHandler
from bsvexplorer.config.config import *


# Initialize logging
logger = logging.getLogger('bsvexplorer')
logger.setLevel(LOGLEVEL)

if ENABLE_BSVEXPLORER_LOGGING:
    BSVEXPLORER_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(str(BSVEXPLORER_LOG_FILE), maxBytes=100 * 1024 * 1024, backupCount=2)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s',
                                  datefmt='%Y/%m/%d %H:%M:%S')
    handler.setFormatter(formatter)
    handler.setLevel(LOGLEVEL)
    logger.addHandler(handler)

    logger.info('WELCOME TO BSVEXPLORER - BITCOIN SV BLOCK EXPLORER CLIENT')
    logger.info('Version: %s' % BSVEXPLORER_VERSION)
    logger.info('Read config from: %s' % BSVEXPLORER_CONFIG_FILE)
    logger.info('Logging to: %s' % BSVEXPLORER_LOG_FILE)
