# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Response cache - store service provider responses in a database cache
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

import threading
from datetime import datetime, timedelta
from bsvexplorer.db_cache import *


_logger = logging.getLogger(__name__)


class ResponseCache(object):
    """
    Store raw GET responses in a database to avoid duplicate calls to service providers.

    Identical GET requests within the expiry window are served from the cache. Once the maximum number of entries is
    reached the oldest entries are removed. POST requests are never cached.

    This class is used by the BaseClient class and normally you won't need to access it directly.

    """

    def __init__(self, db_uri=None, expiry_seconds=CACHE_EXPIRY_SECONDS, max_entries=CACHE_MAX_ENTRIES):
        """
        Open ResponseCache class

        :param db_uri: Database to use for caching, default is a private in-memory database
        :type db_uri: str
        :param expiry_seconds: Number of seconds a response stays valid
        :type expiry_seconds: int
        :param max_entries: Maximum number of stored responses
        :type max_entries: int
        """
        self.db = DbCache(db_uri)
        self.session = self.db.session
        self.expiry_seconds = expiry_seconds
        self.max_entries = max_entries
        self._lock = threading.Lock()

    def close(self):
        with self._lock:
            self.db.close()

    @staticmethod
    def cache_key(url, response_type):
        return '%s#%s' % (url, response_type)

    def commit(self):
        """
        Commit queries in self.session. Rollback if commit fails.

        :return:
        """
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def get(self, url, response_type):
        """
        Get raw content of a cached response which has not expired yet.

        :param url: Full request url
        :type url: str
        :param response_type: Expected response type: json, text or bytes
        :type response_type: str

        :return bytes: Raw response body or None if not found
        """
        key = self.cache_key(url, response_type)
        with self._lock:
            db_resp = self.session.query(DbCacheResponse).filter_by(cache_key=key).scalar()
            if not db_resp:
                return None
            if db_resp.expires <= datetime.now():
                self.session.delete(db_resp)
                self.commit()
                return None
            _logger.debug("Retrieved response for %s from cache" % url)
            return db_resp.content

    def store(self, url, response_type, content, status_code=200):
        """
        Store raw response body in cache. Removes the oldest entries when the cache is full.

        :param url: Full request url
        :type url: str
        :param response_type: Expected response type: json, text or bytes
        :type response_type: str
        :param content: Raw response body
        :type content: bytes
        :param status_code: HTTP status code
        :type status_code: int

        :return:
        """
        now = datetime.now()
        with self._lock:
            self.session.query(DbCacheResponse).filter(DbCacheResponse.expires <= now).delete()
            db_resp = DbCacheResponse(cache_key=self.cache_key(url, response_type), url=url,
                                      response_type=response_type, status_code=status_code, content=content,
                                      created=now, expires=now + timedelta(seconds=self.expiry_seconds))
            self.session.merge(db_resp)
            self.commit()
            n_entries = self.session.query(DbCacheResponse).count()
            if n_entries > self.max_entries:
                oldest = self.session.query(DbCacheResponse).order_by(DbCacheResponse.created).\
                    limit(n_entries - self.max_entries).all()
                for db_old in oldest:
                    self.session.delete(db_old)
                self.commit()
            _logger.debug("Added response for %s to cache" % url)

    def clear(self):
        """
        Remove all responses from cache

        :return:
        """
        with self._lock:
            self.session.query(DbCacheResponse).delete()
            self.commit()

    def count(self):
        with self._lock:
            return self.session.query(DbCacheResponse).count()
