"""REST API client for the kingdom spellers server."""

import requests


class SpellersAPIClient:
    """Client for communicating with the kingdom spellers REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_grades(self) -> list[int]:
        return self._get("/api/grades")['grades']

    def get_state(self) -> dict:
        """Get the current puzzle and progress."""
        return self._get("/api/state")

    def tap_tile(self, tile_id: int) -> dict:
        return self._post("/api/tap", {'tile_id': tile_id})

    def remove_tile(self, slot_index: int) -> dict:
        return self._post("/api/remove", {'slot_index': slot_index})

    def undo(self) -> dict:
        return self._post("/api/undo")

    def restart(self) -> dict:
        return self._post("/api/restart")

    def switch_grade(self, grade: int) -> dict:
        """Switch word banks; the server resets progress."""
        return self._post("/api/grade", {'grade': grade})

    def speak(self) -> dict:
        """Ask the server to pronounce the current word."""
        return self._post("/api/speak")
