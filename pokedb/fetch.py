"""Reading JSON resources from the remote catalog, with retries."""

import logging
import time

import requests

from pokedb.defaults import get_default_api_url

log = logging.getLogger(__name__)


class FetchError(Exception):
    """A catalog resource could not be read."""
    def __init__(self, url, reason):
        super(FetchError, self).__init__(u"%s: %s" % (url, reason))
        self.url = url
        self.reason = reason

class NetworkError(FetchError):
    """Transport failure or a non-2xx response, after all retries."""
    def __init__(self, url, reason, status=None):
        super(NetworkError, self).__init__(url, reason)
        self.status = status

class NotFound(NetworkError):
    """The catalog answered 404."""

class DecodeError(FetchError):
    """The response body was not valid JSON.  Never retried."""


class Fetcher(object):
    """Fetches JSON documents from the catalog.

    `base_url`
        Root of the catalog API.  Defaults to `pokedb.defaults`.

    `attempts`
        Total number of tries per resource.

    `backoff`
        Seconds to wait before the second attempt; the wait before attempt n
        is `backoff * (n - 1)`.

    `session`, `sleep`
        The HTTP session and sleep function to use; tests substitute these.
    """

    def __init__(self, base_url=None, attempts=3, backoff=1.0, timeout=30,
                 session=None, sleep=time.sleep):
        if attempts < 1:
            raise ValueError("attempts must be at least 1, not %r" % (attempts,))
        if base_url is None:
            base_url = get_default_api_url()
        self.base_url = base_url.rstrip('/')
        self.attempts = attempts
        self.backoff = backoff
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers['User-Agent'] = 'pokedb'
        self.session = session
        self.sleep = sleep
        self.request_count = 0

    def url_for(self, *parts, **params):
        """Build a catalog URL, e.g. url_for('pokemon', 25, 'encounters')."""
        url = u'/'.join([self.base_url] + [str(part) for part in parts])
        if params:
            url += u'?' + u'&'.join(
                u'%s=%s' % (key, params[key]) for key in sorted(params))
        return url

    def get(self, url):
        """Return the decoded JSON document at `url`.

        Raises NotFound, NetworkError or DecodeError.
        """
        error = None
        for attempt in range(1, self.attempts + 1):
            if attempt > 1:
                self.sleep(self.backoff * (attempt - 1))

            self.request_count += 1
            try:
                response = self.session.get(url, timeout=self.timeout)
            except requests.RequestException as e:
                error = NetworkError(url, str(e))
            else:
                if 200 <= response.status_code < 300:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise DecodeError(url, u"invalid JSON: %s" % e)

                reason = u"HTTP %d" % response.status_code
                if response.status_code == 404:
                    error = NotFound(url, reason, status=404)
                else:
                    error = NetworkError(url, reason, status=response.status_code)

            if attempt < self.attempts:
                log.warning("Fetching %s failed (%s); attempt %d of %d",
                            url, error.reason, attempt, self.attempts)

        raise error
