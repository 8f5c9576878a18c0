"""Issue wizard use case: choose a repository, give a title, file the issue."""

from __future__ import annotations

import logging

from issuebot.application.dto.issue import FiledIssue, WizardStarted
from issuebot.application.ports.registry_store import RegistryStorePort
from issuebot.application.ports.vendor_gateway import VendorGatewayPort
from issuebot.application.session_manager import WizardSessionManager
from issuebot.domain.session import ChannelContext, IssueKind, IssueSession, SourceMessage
from issuebot.errors import NotFoundError, RegistrationNotFoundError

logger = logging.getLogger("issuebot.wizard")


class IssueWizard:
    """Drives the three wizard steps against the session manager and the store."""

    def __init__(
        self,
        sessions: WizardSessionManager,
        store: RegistryStorePort,
        gateway: VendorGatewayPort,
    ) -> None:
        self._sessions = sessions
        self._store = store
        self._gateway = gateway

    def start(
        self,
        requester_id: str,
        channel: ChannelContext,
        source_message: SourceMessage,
        kind: IssueKind,
    ) -> WizardStarted:
        registrations = tuple(self._store.list_by_owner(requester_id))
        session = IssueSession(
            requester_id=requester_id,
            channel=channel,
            source_message=source_message,
            issue_kind=kind,
        )
        token = self._sessions.create(session)
        return WizardStarted(token=token, registrations=registrations)

    def session(self, requester_id: str, token: str) -> IssueSession:
        """Load the session, hiding sessions that belong to someone else."""
        session = self._sessions.load(token)
        if session.requester_id != requester_id:
            raise NotFoundError(f"session {token!r} not found")
        return session

    def select_repository(self, requester_id: str, token: str, registration_id: int) -> IssueSession:
        session = self.session(requester_id, token).select_registration(registration_id)
        self._sessions.store(token, session)
        return session

    def submit(self, requester_id: str, token: str, title: str) -> FiledIssue:
        session = self.session(requester_id, token).with_title(title)
        self._sessions.store(token, session)
        registration_id, title = session.submission()
        try:
            registration = self._store.get(registration_id)
            if registration.owner_user_id != requester_id:
                raise RegistrationNotFoundError(f"registration {registration_id} not found")
        except RegistrationNotFoundError:
            # selection is fixed for the session lifetime
            self._sessions.delete(token)
            raise
        url = self._gateway.create_remote_issue(
            registration,
            title,
            session.issue_body(),
            session.labels(),
        )
        session = session.complete()
        self._sessions.delete(token)
        logger.info(
            "issue filed",
            extra={
                "data": {
                    "repo": registration.display_name,
                    "kind": session.issue_kind.value,
                    "url": url,
                }
            },
        )
        return FiledIssue(url=url, title=title, registration=registration)


__all__ = ["IssueWizard"]
