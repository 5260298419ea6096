"""REST API client for cardquiz server."""

import requests


class CardQuizAPIClient:
    """Client for communicating with the cardquiz REST API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data or {})
        response.raise_for_status()
        return response.json()

    def _put(self, endpoint: str, data: dict) -> dict:
        """Make a PUT request."""
        response = self.session.put(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_status(self) -> dict:
        """Get score summary and settings for the current user."""
        return self._get("/api/status")

    def next_question(self) -> dict:
        """Draw the next question."""
        return self._get("/api/next")

    def submit_answer(self, name: str, price: str) -> dict:
        """Submit a name/price answer for the current question."""
        return self._post("/api/submit", {'name': name, 'price': price})

    def get_history(self, limit: int = 20) -> dict:
        """Get the current user's most recent results."""
        return self._get("/api/history", {'limit': limit})

    def update_settings(self, **settings) -> dict:
        """Update user, tolerance_pct, strict_name or grade_filter."""
        return self._put("/api/settings", settings)

    def import_cards(self, content: str, fmt: str = 'csv') -> dict:
        """Replace the deck with a CSV or JSON deck."""
        return self._post("/api/cards/import", {'format': fmt, 'content': content})

    def reset(self) -> dict:
        """Clear results and miss counts."""
        return self._post("/api/reset")

    def export_results(self) -> str:
        """Download the result history as CSV text."""
        response = self.session.get(f"{self.base_url}/api/export")
        response.raise_for_status()
        return response.text

    @staticmethod
    def error_detail(error: requests.HTTPError) -> str:
        """Extract the API's error message from a failed response."""
        try:
            return error.response.json().get('detail', str(error))
        except ValueError:
            return str(error)
