# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Cache DataBase - SqlAlchemy database definitions for caching
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

from sqlalchemy import create_engine
from sqlalchemy import Column, Integer, String, DateTime, LargeBinary
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from bsvexplorer.main import *


_logger = logging.getLogger(__name__)
Base = declarative_base()


class DbCache:
    """
    Cache Database object. Initialize database and open session when creating database object.

    The default database is a private in-memory SQLite database, so every cache starts empty and disappears when the
    object is garbage collected.

    """
    def __init__(self, db_uri=None):
        if not db_uri:
            db_uri = 'sqlite://'
        if db_uri == 'sqlite://':
            # A single shared connection, otherwise every pooled connection opens its own empty memory database
            self.engine = create_engine(db_uri, connect_args={'check_same_thread': False}, poolclass=StaticPool)
        else:
            self.engine = create_engine(db_uri)
        Session = sessionmaker(bind=self.engine)
        Base.metadata.create_all(self.engine)
        self.db_uri = db_uri
        _logger.info("Using cache database: %s" % db_uri)
        self.session = Session()

    def close(self):
        """
        Close session and release all database connections. An in-memory database is discarded.
        """
        self.session.close()
        self.engine.dispose()


class DbCacheResponse(Base):
    """
    Response Cache Table

    Stores raw response bodies of GET requests to service providers, keyed by url and expected response type

    """
    __tablename__ = 'cache_responses'
    cache_key = Column(String(2048), primary_key=True, doc="Full request url followed by the response type")
    url = Column(String(2048), doc="Full request url including query string")
    response_type = Column(String(10), doc="Expected response type: json, text or bytes")
    status_code = Column(Integer, default=200, doc="HTTP status code of the cached response")
    content = Column(LargeBinary, doc="Raw response body")
    created = Column(DateTime, index=True, doc="Datetime when response was stored")
    expires = Column(DateTime, doc="Datetime value when response expires")
