"""
Thin HTTP client for the SmartFit API

Every call goes through one requests.Session; once a token is known (set
explicitly or obtained from signup/login) it is sent as a bearer token on
each request.

Usage:
    client = SmartFitClient("http://localhost:8000")
    client.login("demo@example.com", "password")
    print(client.me())
"""

from typing import Any, Dict, Optional

import requests


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class SmartFitClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send a request and decode the JSON body

        Raises:
            ApiError: the server answered with a non-2xx status
        """
        headers = kwargs.pop("headers", {}) or {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=headers,
            timeout=self.timeout,
            **kwargs
        )

        if not response.ok:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            raise ApiError(response.status_code, message)

        return response.json() if response.content else None

    # ========== Auth ==========
    def signup(self, username: str, email: str, password: str, full_name: str) -> Dict[str, Any]:
        data = self.request("POST", "/api/auth/signup", json={
            "username": username,
            "email": email,
            "password": password,
            "fullName": full_name
        })
        self.token = data["token"]
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self.request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data

    def me(self) -> Dict[str, Any]:
        return self.request("GET", "/api/auth/me")

    # ========== Measurements / products ==========
    def capture_measurements(self) -> Dict[str, Any]:
        return self.request("POST", "/api/measurements/capture")

    def save_measurements(self, **measurements: Any) -> Dict[str, Any]:
        return self.request("POST", "/api/measurements", json=measurements)

    def create_product(self, name: str, **fields: Any) -> Dict[str, Any]:
        return self.request("POST", "/api/products", json={"name": name, **fields})

    def predict_fit(self, product_id: str) -> Dict[str, Any]:
        return self.request("POST", "/api/fit-predict", json={"productId": product_id})

    # ========== Misc ==========
    def seed_recommendations(self) -> Any:
        return self.request("POST", "/api/recommendations/samples")

    def health(self, deep: bool = False) -> Dict[str, Any]:
        return self.request("GET", "/api/health", params={"deep": "true"} if deep else None)
