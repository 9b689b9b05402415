import logging

from libs.result import Error, Result, Return
from src.app.services.errors import TRANSIENT_STORE_ERRORS, store_unavailable
from src.app.services.password_hasher import BcryptPasswordHasher
from src.app.services.password_policy import PasswordPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, User, UserStatus
from .dtos import SignupResponse, UserInfo
from .signup_dto import SignupCommand

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Username must not be taken, including by a deleted account
    2. Email must not be taken, including by a deleted account
    3. Password must satisfy the password policy
    4. Hash password with bcrypt
    5. Create active, non-admin User
    6. Create AuditEvent with action=signup
    7. Commit transaction atomically
    """

    def __init__(self, uow: UnitOfWork, hasher: BcryptPasswordHasher, policy: PasswordPolicy):
        self.uow = uow
        self.hasher = hasher
        self.policy = policy

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        """
        Execute signup use case

        Returns:
            Result[SignupResponse], or Error USERNAME_EXISTS / EMAIL_EXISTS /
            WEAK_PASSWORD
        """
        try:
            async with self.uow:
                if await self.uow.users.exists_by_username(command.username):
                    return Return.err(Error("USERNAME_EXISTS", "Username already exists"))

                if await self.uow.users.exists_by_email(command.email):
                    return Return.err(Error("EMAIL_EXISTS", "Email already exists"))

                password_check = self.policy.validate(command.password)
                if password_check.is_err():
                    return Return.err(password_check.error)

                user = User(
                    username=command.username,
                    email=command.email,
                    password_hash=self.hasher.hash(command.password),
                    first_name=command.first_name,
                    last_name=command.last_name,
                    phone=command.phone,
                    status=UserStatus.active,
                    is_super_admin=False,
                    is_deleted=False,
                )
                user = await self.uow.users.create(user)

                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.id,
                        action="signup",
                        event_metadata={"username": command.username},
                    )
                )

                await self.uow.commit()

                logger.info("Created account %s (%s)", user.id, user.username)

                return Return.ok(
                    SignupResponse(
                        user=UserInfo(
                            id=str(user.id),
                            username=user.username,
                            email=user.email,
                            first_name=user.first_name,
                            last_name=user.last_name,
                            status=user.status.value,
                        ),
                        created_at=user.created_at,
                    )
                )
        except TRANSIENT_STORE_ERRORS:
            logger.exception("Identity store unavailable during signup")
            return Return.err(store_unavailable())
