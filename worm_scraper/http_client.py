from typing import Callable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import REQUEST_TIMEOUT, USER_AGENT


def build_session(pool_size: int = 10) -> requests.Session:
    """Create a requests session with connection-level backoff and a polite User-Agent.

    ``pool_size`` should cover the number of threads sharing the session,
    otherwise urllib3 discards surplus connections after every request.
    """
    sess = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods={"GET", "HEAD"},
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
    sess.mount("http://", adapter)
    sess.mount("https://", adapter)
    sess.headers.update({"User-Agent": USER_AGENT})
    return sess


def fetch_html(session: requests.Session, url: str, log_fn: Callable[[str], None]) -> str:
    """GET ``url`` and return the body as text; WordPress serves UTF-8."""
    log_fn(f"Requesting {url}")
    try:
        resp = session.get(url, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        log_fn(f"Request failed for {url}: {exc}")
        raise
    return resp.content.decode("utf-8", errors="replace")
