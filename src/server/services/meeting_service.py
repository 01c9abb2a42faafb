"""Service layer for creating Zoom meetings through either OAuth grant.

Sequences credential resolution, token exchange and the create-meeting
call for the two flows:

- Server-to-Server: self-contained per call, the token is discarded
  when the call returns
- User-level OAuth: the token comes from the calling client's session
"""

import logging
from typing import Mapping, Optional

from src.oauth.coordinator import OAuthCoordinator
from src.oauth.credentials import mask_identifier, resolve_s2s_credentials
from src.oauth.session_store import SessionStateStore
from src.oauth.token_exchange import TokenExchanger
from src.zoom.client import ZoomMeetingsClient
from src.zoom.models import MeetingDetails, MeetingRequest

logger = logging.getLogger(__name__)


class MeetingService:
    """Service for meeting creation.

    Holds no per-request state, so one instance serves concurrent
    requests from any number of clients.

    Attributes:
        exchanger: Token exchanger for the account_credentials grant
        meetings_client: Zoom Meetings API client
        coordinator: User-level OAuth coordinator (None for an S2S-only service)
        s2s_fallback: Configured S2S credentials used when a request omits them
    """

    def __init__(
        self,
        exchanger: TokenExchanger,
        meetings_client: ZoomMeetingsClient,
        coordinator: Optional[OAuthCoordinator] = None,
        s2s_fallback: Optional[Mapping[str, Optional[str]]] = None,
    ):
        self.exchanger = exchanger
        self.meetings_client = meetings_client
        self.coordinator = coordinator
        self.s2s_fallback = dict(s2s_fallback or {})

    def create_s2s_meeting(
        self,
        requested_credentials: Mapping[str, Optional[str]],
        meeting: Optional[MeetingRequest] = None,
    ) -> MeetingDetails:
        """Create a meeting with a fresh Server-to-Server token.

        Args:
            requested_credentials: client_id, client_secret and account_id from
                                   the request (missing values fall back to config)
            meeting: Meeting parameters

        Returns:
            Created meeting details

        Raises:
            MissingCredentialsError: Before any network call if credentials are incomplete
            TokenExchangeError: If Zoom rejects the token request
            MeetingCreationError: If Zoom rejects the create-meeting call
        """
        logger.info("S2S: create meeting request received")
        credentials = resolve_s2s_credentials(requested_credentials, self.s2s_fallback)
        logger.info(f"S2S: using account {mask_identifier(credentials.account_id)}")

        tokens = self.exchanger.exchange_account_credentials(credentials)
        return self.meetings_client.create_meeting(tokens.access_token, meeting)

    def create_oauth_meeting(
        self,
        store: SessionStateStore,
        meeting: Optional[MeetingRequest] = None,
    ) -> MeetingDetails:
        """Create a meeting with the access token stored in the session.

        Args:
            store: Session state of the calling client
            meeting: Meeting parameters

        Returns:
            Created meeting details

        Raises:
            UnauthenticatedError: If the session holds no tokens
            MeetingCreationError: If Zoom rejects the call (including a rejected token)
            RuntimeError: If the service was built without a coordinator
        """
        if self.coordinator is None:
            raise RuntimeError("OAuth meetings need a MeetingService with an OAuthCoordinator")

        access_token = self.coordinator.get_access_token(store)
        logger.info("OAuth: creating meeting with session token")
        return self.meetings_client.create_meeting(access_token, meeting)
