# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Throttle - limit the number of outbound requests per second
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

import time
import threading
import logging


_logger = logging.getLogger(__name__)


class Throttle(object):
    """
    Keep a minimum interval between outbound requests.

    Service providers without an API key allow only a few requests per second. All threads using the same client
    share one Throttle, so concurrent calls are delayed until their slot is reached.

    >>> t = Throttle(0)
    >>> t.wait()
    0.0

    """

    def __init__(self, threshold=0, clock=time.monotonic, sleep=time.sleep):
        """
        :param threshold: Minimum interval between requests in milliseconds. Use 0 to disable throttling
        :type threshold: int
        """
        self.threshold = threshold
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_slot = 0.0

    @property
    def enabled(self):
        return self.threshold > 0

    def wait(self):
        """
        Block until the next request is allowed to leave.

        :return float: Number of seconds waited
        """
        if not self.enabled:
            return 0.0
        with self._lock:
            now = self._clock()
            slot = max(now, self._next_slot)
            self._next_slot = slot + self.threshold / 1000.0
        delay = slot - now
        if delay > 0:
            _logger.debug("Throttle request for %.3f seconds" % delay)
            self._sleep(delay)
        return delay
