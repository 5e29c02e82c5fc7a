#!/usr/bin/env python3
"""
Mediapart HTTP Client Module

Authenticated session against the Mediapart account site: login form
submission, billing page retrieval and bill document download. Requests run
one after another on a single requests.Session so cookies carry over.
"""

import logging
import re
from typing import Any
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from ..core.config import DEFAULT_USER_AGENT, get_config
from .errors import AuthenticationError, MediapartError
from .records import BillingRecord

logger = logging.getLogger(__name__)

LOGIN_URL = "https://www.mediapart.fr/"
ACCOUNT_URL = "https://moncompte.mediapart.fr/"
LISTING_URL = "https://moncompte.mediapart.fr/base/moncompte/ajax/index.php"

LOGIN_FORM_SELECTOR = "#logFormEl"
LOGOUT_LINK_SELECTOR = "a[href='/logout']"
# A logged-in page shows the logout link twice (header and menu)
LOGGED_IN_LOGOUT_LINKS = 2
SESSION_PATTERN = re.compile(r"sess=([^&]*)")


class MediapartClient:
    """
    Sequential HTTP client for the Mediapart account site.

    Transport errors (connection failures, non-2xx responses) propagate as
    requests exceptions; there is no retry.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: int | None = None,
        user_agent: str | None = None,
    ):
        """Initialize with an optional session; timeout defaults to configuration."""
        if timeout is None:
            timeout = get_config().mediapart.timeout

        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        logger.debug(f"GET {url}")
        response = self.session.get(url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response

    def authenticate(self, login: str, password: str) -> None:
        """
        Log in through the site's login form.

        Raises:
            AuthenticationError: If the form is missing or the credentials are refused
        """
        logger.info("Authenticating ...")
        page = BeautifulSoup(self._get(LOGIN_URL).text, "lxml")

        form = page.select_one(LOGIN_FORM_SELECTOR)
        if form is None:
            raise AuthenticationError(f"Login form {LOGIN_FORM_SELECTOR} not found on {LOGIN_URL}")

        form_data = {
            field["name"]: field.get("value", "")
            for field in form.select("input[name]")
            if field.get("type") not in ("submit", "button")
        }
        form_data.update({"name": login, "password": password})

        action = urljoin(LOGIN_URL, form.get("action") or LOGIN_URL)
        method = (form.get("method") or "post").lower()
        if method == "get":
            response = self.session.get(action, params=form_data, timeout=self.timeout)
        else:
            response = self.session.post(action, data=form_data, timeout=self.timeout)
        response.raise_for_status()

        result = BeautifulSoup(response.text, "lxml")
        if len(result.select(LOGOUT_LINK_SELECTOR)) != LOGGED_IN_LOGOUT_LINKS:
            message = " ".join(error.get_text(strip=True) for error in result.select(".js-flash-message .error"))
            logger.error(message or "Login refused without an error message")
            raise AuthenticationError(message or "Login refused")

        logger.info("Successfully logged in")

    def fetch_account_page(self) -> str:
        """Fetch the account home page."""
        return self._get(ACCOUNT_URL).text

    @staticmethod
    def extract_session_token(html_content: str) -> str | None:
        """
        Extract the session token from the account page's embedded iframe.

        Returns:
            The sess query value, or None if the page embeds no account iframe
        """
        page = BeautifulSoup(html_content, "lxml")
        iframe = page.select_one("iframe[src*=moncompte]")
        if iframe is None:
            return None

        match = SESSION_PATTERN.search(iframe.get("src", ""))
        if match is None:
            raise MediapartError("Account iframe has no session token")
        return match.group(1)

    def fetch_billing_html(self) -> str:
        """
        Fetch the page listing the account's bills.

        Older account pages embed the listing through an iframe; the listing is
        then fetched with the iframe's session token. Newer pages carry the
        listing directly.
        """
        account_html = self.fetch_account_page()

        logger.info("Getting the session id")
        session_token = self.extract_session_token(account_html)
        if session_token is None:
            logger.info("No session iframe, using the account page as listing")
            return account_html

        logger.info("Fetching the list of documents")
        return self._get(LISTING_URL, params={"abonnement": 0, "sess": session_token}).text

    def download(self, fileurl: str, request_options: dict[str, Any] | None = None) -> bytes:
        """
        Download one bill document.

        Args:
            fileurl: Absolute document URL
            request_options: Transport hints carried by the record (e.g. headers)
        """
        headers = dict((request_options or {}).get("headers", {}))
        return self._get(fileurl, headers=headers).content

    def fetch_bill(self, record: BillingRecord) -> bytes:
        """Download the document of a billing record."""
        return self.download(record.fileurl, record.request_options)
