# app/services/auth/service.py
from __future__ import annotations

import hashlib
import logging
import uuid

from app.core.logger import mask_token
from app.services._shared.base import BaseService
from app.services._shared.errors import (
    AccountRestrictedError,
    DeviceNotFoundError,
    ExpiredOrInvalidRefreshError,
    TokenNotFoundError,
)
from app.services._shared.ports import (
    DeviceDirectory,
    DirectoryUser,
    IdentityProviderRegistry,
    RevocationStore,
    SessionStore,
    UserDirectory,
)
from app.services.auth.dto import (
    DeviceLoginIn,
    DeviceLoginOut,
    ExistingMember,
    LoginOutcome,
    LogoutIn,
    NewMember,
    ReissueIn,
    SocialLoginIn,
    TokenPairOut,
)
from app.services.rate_limit.service import RateLimitService
from app.services.tokens.dto import ROLE_DEVICE
from app.services.tokens.service import TokenService

log = logging.getLogger(__name__)

RESTRICTED_STATUSES = frozenset({"SUSPENDED", "DORMANT", "DELETED"})
PENDING_STATUS = "REGISTER"


def device_principal_id(pet_id: int) -> str:
    """
    Stable principal id of the device paired with ``pet_id``.

    Name-based (MD5, version 3) UUID of ``"DEVICE:<pet_id>"`` without a
    namespace, so every login of the same pet maps to the same session slot.
    """
    digest = hashlib.md5(f"DEVICE:{pet_id}".encode(), usedforsecurity=False).digest()
    return str(uuid.UUID(bytes=digest, version=3))


class AuthService(BaseService):
    """
    Authentication session lifecycle (social login / logout / reissue / device login).

    Tokens come from :class:`TokenService`; one refresh token per principal
    lives in the :class:`SessionStore` and is rotated on every reissue; access
    tokens are revoked early through the :class:`RevocationStore`.
    """

    def __init__(
        self,
        *,
        token_service: TokenService,
        session_store: SessionStore,
        revocation_store: RevocationStore,
        rate_limiter: RateLimitService,
        providers: IdentityProviderRegistry,
        users: UserDirectory,
        devices: DeviceDirectory | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param token_service: Token issuance/validation.
        :param session_store: Refresh sessions (one per principal).
        :param revocation_store: Access-token blacklist.
        :param rate_limiter: Per-IP login gate.
        :param providers: Social provider registry.
        :param users: Account directory.
        :param devices: Device pairing directory (device login only).
        """
        super().__init__()
        self.tokens = token_service
        self.sessions = session_store
        self.revocations = revocation_store
        self.rate_limiter = rate_limiter
        self.providers = providers
        self.users = users
        self.devices = devices

    # ------------------------------------------------------------------ #
    # Social login
    # ------------------------------------------------------------------ #

    def social_login(self, dto: SocialLoginIn) -> LoginOutcome:
        """
        Log a user in through a social provider.

        Steps: rate gate → provider resolution → code exchange → profile →
        directory resolution → restricted-status gate → branch.

        :param dto: Login input.
        :returns: :class:`NewMember` (registration token only) or
            :class:`ExistingMember` (full session, refresh token stored).
        :raises RateLimitedError: IP banned or over threshold.
        :raises UnsupportedProviderError: Unknown provider name.
        :raises UpstreamAuthError: Provider call failed.
        :raises AccountRestrictedError: Suspended, dormant or deleted account.
        """
        self.rate_limiter.check_and_enforce(dto.client_ip)

        client = self.providers.resolve(dto.provider)
        provider_token = client.exchange_code(dto.code)
        profile = client.fetch_profile(provider_token)

        user = self.users.find_or_provision(profile.email, profile.name, profile.avatar_url)

        if user.status in RESTRICTED_STATUSES:
            log.warning(
                "auth.login_restricted status=%s",
                user.status,
                extra={"principal": user.principal_id, "client_ip": dto.client_ip},
            )
            raise AccountRestrictedError(status=user.status)

        if user.status == PENDING_STATUS:
            log.info("auth.login_new_member", extra={"principal": user.principal_id})
            return NewMember(
                email=user.email,
                name=user.name,
                registration_token=self.tokens.issue_registration_token(user.email),
                token_expires_in=self.tokens.registration_expires_in,
            )

        return self._existing_member(user)

    def _existing_member(self, user: DirectoryUser) -> ExistingMember:
        pair = self.start_session(user.principal_id, user.role)
        log.info("auth.login_succeeded", extra={"principal": user.principal_id})
        return ExistingMember(
            principal_id=user.principal_id,
            role=user.role,
            profile_url=user.profile_url,
            tokens=pair,
        )

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Close the session of ``dto.refresh_token`` and revoke the access token.

        :raises TokenNotFoundError: The refresh token has no live session
            (already logged out, rotated away, or never issued).
        """
        record = self.sessions.find_by_value(dto.refresh_token)
        if record is None or not self.sessions.delete(record):
            raise TokenNotFoundError()

        remaining = self.tokens.remaining_validity(dto.access_token)
        self.revocations.revoke(dto.access_token, remaining)
        log.info(
            "auth.logout revoked_for=%ds",
            int(remaining.total_seconds()),
            extra={"principal": record.principal_id},
        )

    # ------------------------------------------------------------------ #
    # Reissue (refresh token rotation)
    # ------------------------------------------------------------------ #

    def reissue(self, dto: ReissueIn) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        The old record is removed with a compare-and-delete; among concurrent
        reissues of the same token only one wins, the others fail with
        :class:`TokenNotFoundError`.

        :raises ExpiredOrInvalidRefreshError: Signature/expiry check failed
            (checked before touching the store).
        :raises TokenNotFoundError: No live session holds this token.
        """
        if not self.tokens.validate(dto.refresh_token):
            raise ExpiredOrInvalidRefreshError()

        record = self.sessions.find_by_value(dto.refresh_token)
        if record is None:
            log.warning("auth.reissue_unknown_token", extra={"token": mask_token(dto.refresh_token)})
            raise TokenNotFoundError()
        if not self.sessions.delete(record):
            # Lost the race against a concurrent reissue/logout
            raise TokenNotFoundError()

        pair = self.start_session(record.principal_id, record.role)
        log.info("auth.reissued", extra={"principal": record.principal_id})
        return pair

    # ------------------------------------------------------------------ #
    # Device login
    # ------------------------------------------------------------------ #

    def device_login(self, dto: DeviceLoginIn) -> DeviceLoginOut:
        """
        Start a ``DEVICE`` session for the tracker paired with a pet.

        :raises DeviceNotFoundError: No pet is paired with ``dto.device_id``.
        """
        pet = self.devices.find_by_device_id(dto.device_id) if self.devices else None
        if pet is None:
            raise DeviceNotFoundError(device_id=dto.device_id)

        principal_id = device_principal_id(pet.pet_id)
        pair = self.start_session(principal_id, ROLE_DEVICE)
        log.info("auth.device_login pet_id=%s", pet.pet_id, extra={"principal": principal_id})
        return DeviceLoginOut(pet_id=pet.pet_id, tokens=pair)

    # ------------------------------------------------------------------ #
    # Shared
    # ------------------------------------------------------------------ #

    def start_session(self, principal_id: str, role: str) -> TokenPairOut:
        """Issue an access/refresh pair and store the refresh token as the principal's session."""
        access = self.tokens.issue_access(principal_id, role)
        refresh = self.tokens.issue_refresh(principal_id)
        self.sessions.save(principal_id, refresh, role)
        return TokenPairOut(
            access_token=access,
            refresh_token=refresh,
            access_token_expires_in=self.tokens.access_expires_in,
        )
