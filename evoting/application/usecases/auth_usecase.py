"""Account registration, e-mail verification, login and password reset."""

import uuid

from pydantic import validate_email

from evoting.application.dtos.user_dto import (
    AuthenticateOutputDto,
    CreateAdminInputDto,
    ForgotPasswordInputDto,
    ForgotPasswordOutputDto,
    LoginInputDto,
    LoginOutputDto,
    RegisterUserInputDto,
    ResetPasswordInputDto,
    UserOutputDto,
    UserOutputItem,
)
from evoting.application.usecases.base import TransactionalUseCase
from evoting.common.logging import get_logger
from evoting.domain.entities import User, UserRole
from evoting.domain.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from evoting.domain.services.interfaces.notification_service import (
    INotificationService,
)
from evoting.domain.services.interfaces.password_hasher import IPasswordHasher
from evoting.domain.services.interfaces.token_service import ITokenService
from evoting.domain.services.interfaces.unit_of_work import IUnitOfWork
from evoting.domain.value_objects.actor import Actor


logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8
RESET_PASSWORD_PURPOSE = "reset_password"


class AuthUseCase(TransactionalUseCase):
    """Account lifecycle up to an authenticated Actor."""

    def __init__(
        self,
        uow: IUnitOfWork,
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
        notification_service: INotificationService,
        client_url: str = "http://localhost:3000",
        reset_token_minutes: int = 480,
    ) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work providing the repositories
            password_hasher: Hashes and verifies passwords
            token_service: Issues and decodes access and reset tokens
            notification_service: Sends verification and reset e-mails
            client_url: Base URL of the front end, used in e-mailed links
            reset_token_minutes: Lifetime of password reset tokens
        """
        super().__init__(uow)
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.notification_service = notification_service
        self.client_url = client_url.rstrip("/")
        self.reset_token_minutes = reset_token_minutes

    async def register_user(self, input_dto: RegisterUserInputDto) -> UserOutputDto:
        """Create an unverified USER account and send a verification link."""
        try:
            email = self._validate_credentials(
                input_dto.name, input_dto.email, input_dto.password
            )
            if await self.uow.user_repository.get_by_email(email) is not None:
                raise DuplicateEmailError("E-mail is already registered")

            user = await self.uow.user_repository.create(
                User(
                    name=input_dto.name.strip(),
                    email=email,
                    password_hash=self.password_hasher.hash(input_dto.password),
                    verification_token=uuid.uuid4().hex,
                )
            )
            await self.uow.commit()
        except Exception as e:
            code, message = await self._handle_failure("register user", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

        logger.info("User registered", user_id=user.id)
        verify_url = f"{self.client_url}/verify-email/{user.verification_token}"
        await self.notification_service.send(
            user.email, "verify_email", {"name": user.name, "verify_url": verify_url}
        )
        return UserOutputDto(user=UserOutputItem.from_entity(user))

    async def verify_email(self, token: str) -> UserOutputDto:
        try:
            user = await self.uow.user_repository.get_by_verification_token(token)
            if user is None:
                raise NotFoundError("Verification token")
            user.mark_email_verified()
            updated = await self.uow.user_repository.update(user)
            await self.uow.commit()
            logger.info("E-mail verified", user_id=updated.id)
            return UserOutputDto(user=UserOutputItem.from_entity(updated))
        except Exception as e:
            code, message = await self._handle_failure("verify email", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

    async def login(self, input_dto: LoginInputDto) -> LoginOutputDto:
        """Check credentials and issue an access token."""
        try:
            user = await self.uow.user_repository.get_by_email(
                input_dto.email.strip().lower()
            )
            if user is None or not self.password_hasher.verify(
                input_dto.password, user.password_hash
            ):
                raise InvalidCredentialsError("Invalid e-mail or password")
            self._ensure_active(user)

            token = self.token_service.issue(
                {
                    "id": user.id,
                    "name": user.name,
                    "email": user.email,
                    "access": user.role.value,
                }
            )
            return LoginOutputDto(
                access_token=token, user=UserOutputItem.from_entity(user)
            )
        except Exception as e:
            code, message = await self._handle_failure("login", e)
            return LoginOutputDto(success=False, error_code=code, error_message=message)

    async def authenticate(self, token: str) -> AuthenticateOutputDto:
        """Resolve an access token to the Actor it represents.

        The role is read from the stored account, not the token, so role
        changes and terminations apply immediately.
        """
        try:
            claims = self.token_service.decode(token)
            user_id = claims.get("id")
            if not isinstance(user_id, int) or "purpose" in claims:
                raise InvalidCredentialsError("Not an access token")

            user = await self.uow.user_repository.get_by_id(user_id)
            if user is None:
                raise InvalidCredentialsError("Account no longer exists")
            self._ensure_active(user)
            return AuthenticateOutputDto(
                actor=Actor(
                    user_id=user.id,  # type: ignore[arg-type]
                    role=user.role,
                    email=user.email,
                    name=user.name,
                )
            )
        except Exception as e:
            code, message = await self._handle_failure("authenticate", e)
            return AuthenticateOutputDto(
                success=False, error_code=code, error_message=message
            )

    async def create_admin(self, input_dto: CreateAdminInputDto) -> UserOutputDto:
        """Create a verified ADMIN account (operator bootstrap)."""
        try:
            email = self._validate_credentials(
                input_dto.name, input_dto.email, input_dto.password
            )
            if await self.uow.user_repository.get_by_email(email) is not None:
                raise DuplicateEmailError("E-mail is already registered")

            user = await self.uow.user_repository.create(
                User(
                    name=input_dto.name.strip(),
                    email=email,
                    password_hash=self.password_hasher.hash(input_dto.password),
                    role=UserRole.ADMIN,
                    is_email_verified=True,
                )
            )
            await self.uow.commit()
            logger.info("Admin created", user_id=user.id)
            return UserOutputDto(user=UserOutputItem.from_entity(user))
        except Exception as e:
            code, message = await self._handle_failure("create admin", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

    async def forgot_password(
        self, input_dto: ForgotPasswordInputDto
    ) -> ForgotPasswordOutputDto:
        """E-mail a password reset link to an active account."""
        try:
            user = await self.uow.user_repository.get_by_email(
                self._normalize_email(input_dto.email)
            )
            if user is None:
                raise NotFoundError("User with this e-mail")
            self._ensure_active(user)

            token = self.token_service.issue(
                {"id": user.id, "purpose": RESET_PASSWORD_PURPOSE},
                expires_minutes=self.reset_token_minutes,
            )
        except Exception as e:
            code, message = await self._handle_failure("forgot password", e)
            return ForgotPasswordOutputDto(
                success=False, error_code=code, error_message=message
            )

        logger.info("Password reset requested", user_id=user.id)
        await self.notification_service.send(
            user.email,
            "reset_password",
            {
                "name": user.name,
                "reset_url": f"{self.client_url}/reset-password?token={token}",
            },
        )
        return ForgotPasswordOutputDto()

    async def reset_password(self, input_dto: ResetPasswordInputDto) -> UserOutputDto:
        """Replace the password of the account named by a reset token."""
        try:
            self._validate_password(input_dto.password)
            try:
                claims = self.token_service.decode(input_dto.token)
            except InvalidCredentialsError as e:
                raise ValidationError("Invalid or expired reset token") from e
            user_id = claims.get("id")
            if claims.get("purpose") != RESET_PASSWORD_PURPOSE or not isinstance(
                user_id, int
            ):
                raise ValidationError("Invalid or expired reset token")

            user = await self.uow.user_repository.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            self._ensure_active(user)

            user.password_hash = self.password_hasher.hash(input_dto.password)
            updated = await self.uow.user_repository.update(user)
            await self.uow.commit()
            logger.info("Password reset", user_id=updated.id)
            return UserOutputDto(user=UserOutputItem.from_entity(updated))
        except Exception as e:
            code, message = await self._handle_failure("reset password", e)
            return UserOutputDto(success=False, error_code=code, error_message=message)

    @classmethod
    def _validate_credentials(cls, name: str, email: str, password: str) -> str:
        if not name or not name.strip():
            raise ValidationError("Name is required")
        normalized = cls._normalize_email(email)
        cls._validate_password(password)
        return normalized

    @staticmethod
    def _normalize_email(email: str) -> str:
        try:
            _, normalized = validate_email((email or "").strip())
        except ValueError as e:
            raise ValidationError("E-mail address is not valid") from e
        return normalized.lower()

    @staticmethod
    def _validate_password(password: str) -> None:
        password = password or ""
        if (
            len(password) < MIN_PASSWORD_LENGTH
            or not any(c.islower() for c in password)
            or not any(c.isupper() for c in password)
            or not any(c.isdigit() for c in password)
        ):
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters and "
                "contain a lowercase letter, an uppercase letter and a digit"
            )

    @staticmethod
    def _ensure_active(user: User) -> None:
        if not user.is_email_verified:
            raise UnauthorizedError("E-mail address is not verified")
        if user.is_terminated:
            raise UnauthorizedError("Account has been terminated")
