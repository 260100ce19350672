# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    Base Client
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

import json
import requests
from urllib.parse import urlencode
from bsvexplorer.main import *
from bsvexplorer.config.providers import Provider, PROVIDERS
from bsvexplorer.networks import network_resolve, NetworkError
from bsvexplorer.services.caching import ResponseCache
from bsvexplorer.services.throttle import Throttle

_logger = logging.getLogger(__name__)

TIMEOUT_MULTIPART = 100


class ClientError(Exception):
    def __init__(self, msg=''):
        self.msg = msg
        _logger.info(msg)

    def __str__(self):
        return self.msg


class ExplorerConfigError(ClientError):
    pass


class ExplorerValidationError(ClientError, ValueError):
    pass


class ExplorerTransportError(ClientError):
    pass


class ExplorerResponseError(ClientError):
    """
    Service provider responded with an error status. The message is the serialized response payload.
    """
    def __init__(self, msg='', status_code=None, payload=None):
        self.status_code = status_code
        self.payload = payload
        super(ExplorerResponseError, self).__init__(msg)


class UnsupportedOperationError(ClientError):
    """
    Selected service provider has no equivalent for the requested operation.
    """
    def __init__(self, operation, provider=None):
        self.operation = operation
        self.provider = provider
        super(UnsupportedOperationError, self).__init__("%s Not implemented." % operation)


def provider_from_key(key):
    """
    Get Provider enum from provider key string

    >>> provider_from_key('WoC')
    <Provider.WOC: 'woc'>

    :param key: Provider key: bitails, bsvdirect, electrumx or woc
    :type key: str, Provider

    :return Provider:
    """
    if isinstance(key, Provider):
        return key
    try:
        return Provider(str(key).lower())
    except ValueError:
        raise ExplorerConfigError("Provider '%s' not found in provider definitions, use one of: %s" %
                                  (key, ', '.join(p.value for p in Provider)))


class BaseClient(object):

    def __init__(self, network=DEFAULT_NETWORK, api=DEFAULT_PROVIDER, api_key=None, timeout=TIMEOUT_REQUESTS,
                 user_agent=None, cache=SERVICE_CACHING_ENABLED, url=None, throttle_threshold=None, session=None):
        try:
            self.network = network_resolve(network)
        except NetworkError as e:
            raise ExplorerConfigError(e.msg)
        self.provider = provider_from_key(api)
        self.descriptor = PROVIDERS[self.provider]
        self.api_key = api_key
        self.timeout = timeout
        self.user_agent = user_agent
        self.base_url = url if url else getattr(self.descriptor, self.network)
        if not self.base_url:
            raise ExplorerConfigError("Provider %s has no %s network url, please specify url" %
                                      (self.descriptor.name, self.network))
        if not self.base_url.endswith('/'):
            self.base_url += '/'

        self.headers = {
            'Cache-Control': 'no-cache',
            'Accept': 'application/json',
        }
        if user_agent:
            self.headers['User-Agent'] = user_agent
        if api_key:
            self.headers[self.descriptor.header_key] = api_key
        if throttle_threshold is None:
            throttle_threshold = 0 if api_key else THROTTLE_THRESHOLD
        self.throttle = Throttle(throttle_threshold)
        self.cache = ResponseCache() if cache else None

        self._own_session = session is None
        self.session = requests.Session() if session is None else session
        self.session.headers.update(self.headers)
        self.resp = None

    def __enter__(self):
        return self

    def __exit__(self, exception_type, exception_value, traceback):
        self.close()

    def close(self):
        """
        Release the response cache database and close the requests session if it was created by this client.
        A session passed by the caller is left open.

        :return:
        """
        if self.cache:
            self.cache.close()
            self.cache = None
        if self._own_session:
            self.session.close()

    def _url(self, url_path, variables=None):
        if url_path.startswith('http://') or url_path.startswith('https://'):
            url = url_path
        else:
            url = self.base_url + url_path
        if variables:
            url += ('&' if '?' in url else '?') + urlencode(variables)
        return url

    @staticmethod
    def _parse_response(content, response_type='json'):
        if response_type == 'bytes':
            return content
        text = content.decode('utf-8', errors='replace')
        if response_type == 'text':
            return text
        try:
            return json.loads(text)
        except ValueError:
            return text

    def _parse_error(self, resp, log_url):
        payload = resp.content
        if isinstance(payload, bytes):
            payload = payload.decode('utf-8', errors='replace')
            try:
                payload = json.loads(payload)
            except ValueError:
                pass
        _logger.info("Error response [%d] from %s on url %s" % (resp.status_code, self.descriptor.name, log_url))
        raise ExplorerResponseError(json.dumps(payload, separators=(',', ':')), status_code=resp.status_code,
                                    payload=payload)

    def request(self, url_path, variables=None, method='get', response='json', post_data=None):
        """
        Send request to service provider and return parsed response.

        :param url_path: Path relative to base url, or a full url
        :type url_path: str
        :param variables: Url query variables, values are urlencoded
        :type variables: dict, list
        :param method: Request method: get, post or multipart
        :type method: str
        :param response: Expected response type: json, text or bytes
        :type response: str
        :param post_data: Dictionary with data to post. For multipart requests values must be bytes
        :type post_data: dict

        :return dict, list, str, bytes:
        """
        url = self._url(url_path, variables)
        log_url = url if '@' not in url else url.split('@')[1]

        if method == 'get' and self.cache:
            content = self.cache.get(url, response)
            if content is not None:
                return self._parse_response(content, response)

        self.throttle.wait()
        kwargs = {'timeout': self.timeout}
        if method == 'get':
            _logger.info("Url get request %s" % log_url)
            http_method = 'GET'
        elif method == 'post':
            _logger.info("Url post request %s" % log_url)
            http_method = 'POST'
            kwargs['json'] = post_data
        elif method == 'multipart':
            _logger.info("Url multipart post request %s" % log_url)
            http_method = 'POST'
            kwargs['files'] = {k: (k, v, 'application/octet-stream') for k, v in (post_data or {}).items()}
            kwargs['timeout'] = TIMEOUT_MULTIPART
        else:
            raise ClientError("Unknown request method %s" % method)

        try:
            self.resp = self.session.request(http_method, url, **kwargs)
        except requests.RequestException as e:
            if e.response is not None:
                self.resp = e.response
            else:
                raise ExplorerTransportError(str(e))

        if response == 'bytes':
            resp_text = '%d bytes' % len(self.resp.content)
        else:
            resp_text = self.resp.text
            if len(resp_text) > 1000:
                resp_text = resp_text[:970] + '... truncated, length %d' % len(resp_text)
        _logger.debug("Response [%d] %s" % (self.resp.status_code, resp_text))
        if self.resp.status_code == 429:
            _logger.warning("Maximum number of requests reached for %s with url %s" % (self.descriptor.name, log_url))
        if not 200 <= self.resp.status_code < 300:
            self._parse_error(self.resp, log_url)

        if method == 'get' and self.cache:
            self.cache.store(url, response, self.resp.content, self.resp.status_code)
        return self._parse_response(self.resp.content, response)
