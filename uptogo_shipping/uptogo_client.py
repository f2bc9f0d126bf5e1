"""Uptogo logistics API client."""

import logging
import os
from typing import Any

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_API_URLS = {
    "dev": "http://localhost/uptogo/api",
    "prod": "https://api.uptogo.com.br",
}

_APP_URLS = {
    "dev": "http://localhost:3000",
    "prod": "https://web.uptogo.com.br",
}

DEFAULT_TIMEOUT = 30.0


def _environment(env: str | None = None) -> str:
    return "dev" if (env or os.getenv("UPTOGO_ENV", "")) == "dev" else "prod"


def get_base_url_api(env: str | None = None) -> str:
    """Return the API base URL for the current environment."""
    return _API_URLS[_environment(env)]


def get_base_url_app(env: str | None = None) -> str:
    """Return the web app base URL, used for delivery tracking links."""
    return _APP_URLS[_environment(env)]


class UptogoClient:
    """Client for the Uptogo REST API.

    Every call returns the decoded JSON response, or None when the
    request failed for any reason. Nothing is retried.
    """

    def __init__(
        self,
        api_key: str | None = None,
        env: str | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else os.getenv("UPTOGO_API_KEY", "")
        self.base_url = get_base_url_api(env)
        self.timeout = timeout or float(os.getenv("UPTOGO_TIMEOUT", DEFAULT_TIMEOUT))
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Basic {self.api_key}",
                "Content-Type": "application/json",
            }
        )

    def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        body: Any = None,
    ) -> Any:
        """Issue a request against the API.

        Args:
            method: HTTP method.
            path: Path relative to the API base URL.
            params: URL query parameters.
            body: JSON-serialisable request body.

        Returns:
            The decoded JSON response, or None on a transport error,
            an error status or a body that is not JSON.
        """
        url = f"{self.base_url}/{path}"
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=body,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except ValueError as exc:
            logger.warning("Uptogo %s %s returned invalid JSON: %s", method, path, exc)
        except requests.RequestException as exc:
            logger.warning("Uptogo %s %s failed: %s", method, path, exc)
        return None

    def get_customer(self, api_key: str) -> Any:
        return self.request("GET", "Cliente.php/by_api_key", {"api_key": api_key})

    def get_place_suggestions(self, postcode: str) -> Any:
        return self.request("GET", "placeautocompletes", {"input": postcode})

    def get_place_details(self, place_id: str) -> Any:
        return self.request("GET", "placedetails", {"input": place_id})

    def get_directions(self, points: list) -> Any:
        return self.request("POST", "directions", body={"Pontos": points})

    def create_delivery_request(self, payload: dict) -> Any:
        return self.request("POST", "solicitacaoentregas", {"return": "true"}, payload)

    def create_merchandise(self, inventory_id: str, payload: dict) -> Any:
        return self.request(
            "POST",
            f"solicitacaoentregas/{inventory_id}/mercadorias",
            {"return": "true"},
            payload,
        )

    def get_rates(self, inventory_id: str) -> Any:
        return self.request("GET", f"solicitacaoentregas/{inventory_id}/cotacaos")

    def get_rate(self, inventory_id: str, proposal_id: str) -> Any:
        return self.request(
            "GET", f"solicitacaoentregas/{inventory_id}/cotacaos/{proposal_id}"
        )

    def create_delivery(self, payload: dict) -> Any:
        return self.request("POST", "Pedido.php/criarEcommerce", body={"Pedido": payload})

    def cancel_delivery(self, request_id: str) -> Any:
        return self.request("POST", "Pedido.php/cancelarLote", body={"id": request_id})
