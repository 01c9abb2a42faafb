"""
Zoom API endpoint definitions.

Documentation: https://developers.zoom.us/docs/api/
"""

# REST API
API_BASE_URL = "https://api.zoom.us"
USER_MEETINGS = "/v2/users/{userId}/meetings"
