"""Runtime wiring for the issuebot service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from issuebot.application.file_issue import IssueWizard
from issuebot.application.manage_repositories import RepositoryService
from issuebot.application.session_manager import WizardSessionManager
from issuebot.domain.registration import Vendor
from issuebot.infrastructure.discord.rest import DiscordRestClient
from issuebot.infrastructure.discord.router import InteractionRouter
from issuebot.infrastructure.discord.signature import InteractionSignatureVerifier
from issuebot.infrastructure.http.routes import InteractionRouteDeps
from issuebot.infrastructure.state.registry_store import SqliteRegistryStore
from issuebot.infrastructure.state.session_registry import InMemorySessionRegistry
from issuebot.infrastructure.vendors.gateway import HttpVendorGateway
from issuebot.infrastructure.vendors.github import GitHubClient
from issuebot.infrastructure.vendors.gitlab import GitLabClient
from issuebot.runtime.settings import Settings

logger = logging.getLogger("issuebot.runtime")


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Aggregated runtime components for the issuebot service."""

    settings: Settings
    store: SqliteRegistryStore
    session_registry: InMemorySessionRegistry
    session_manager: WizardSessionManager
    gateway: HttpVendorGateway
    discord_client: DiscordRestClient
    repositories: RepositoryService
    wizard: IssueWizard
    router: InteractionRouter
    interaction_deps_provider: Callable[[], InteractionRouteDeps]

    def close(self) -> None:
        self.store.close()


def build_runtime(settings: Settings | None = None) -> RuntimeContext:
    """Construct the runtime context shared by the server and the CLI."""
    resolved = settings or Settings.load()
    logger.info(
        "building issuebot runtime",
        extra={"data": {"db_path": str(resolved.db_path), "port": resolved.port}},
    )

    store = open_store(resolved)
    session_registry = InMemorySessionRegistry()
    session_manager = WizardSessionManager(session_registry)
    gateway = build_vendor_gateway(resolved)
    discord_client = build_discord_client(resolved)

    repositories = RepositoryService(store, gateway)
    wizard = IssueWizard(session_manager, store, gateway)
    router = InteractionRouter(
        wizard=wizard,
        repositories=repositories,
        followups=discord_client,
    )
    verifier = InteractionSignatureVerifier(_require(resolved.discord.public_key, "DISCORD_PUBLIC_KEY"))

    return RuntimeContext(
        settings=resolved,
        store=store,
        session_registry=session_registry,
        session_manager=session_manager,
        gateway=gateway,
        discord_client=discord_client,
        repositories=repositories,
        wizard=wizard,
        router=router,
        interaction_deps_provider=_make_interaction_provider(router, verifier),
    )


def open_store(settings: Settings) -> SqliteRegistryStore:
    return SqliteRegistryStore(settings.db_path)


def build_vendor_gateway(settings: Settings) -> HttpVendorGateway:
    vendors = settings.vendors
    return HttpVendorGateway(
        {
            Vendor.GITHUB: GitHubClient(
                base_url=vendors.github_api_base_url,
                timeout_seconds=vendors.timeout_seconds,
            ),
            Vendor.GITLAB: GitLabClient(
                base_url=vendors.gitlab_api_base_url,
                timeout_seconds=vendors.timeout_seconds,
            ),
        }
    )


def build_discord_client(settings: Settings) -> DiscordRestClient:
    discord = settings.discord
    return DiscordRestClient(
        application_id=_require(discord.application_id, "DISCORD_APP_ID"),
        bot_token=discord.bot_token_value,
        base_url=discord.api_base_url,
    )


def _require(value: str, env_var: str) -> str:
    if not value:
        raise RuntimeError(f"{env_var} must be configured")
    return value


def _make_interaction_provider(
    router: InteractionRouter,
    verifier: InteractionSignatureVerifier,
) -> Callable[[], InteractionRouteDeps]:
    deps = InteractionRouteDeps(router=router, verifier=verifier)

    def provider() -> InteractionRouteDeps:
        return deps

    return provider


__all__ = [
    "RuntimeContext",
    "build_discord_client",
    "build_runtime",
    "build_vendor_gateway",
    "open_store",
]
