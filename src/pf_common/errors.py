"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Users / auth
  2xxx: Accounts
  3xxx: Categories
  4xxx: Transactions
  5xxx: Financial goals
  6xxx: Reports
  9xxx: System

Migration errors are startup failures, not request failures, so they do not
derive from AppError and carry no HTTP status.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Users / auth ---

class UserNotFoundError(AppError):
    def __init__(self, user_id: int) -> None:
        super().__init__(1001, f"User not found: {user_id}", 404)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid or expired token", 401)


# --- 2xxx: Accounts ---

class AccountNotFoundError(AppError):
    def __init__(self, account_id: int) -> None:
        super().__init__(2001, f"Account not found: {account_id}", 404)


# --- 3xxx: Categories ---

class CategoryNotFoundError(AppError):
    def __init__(self, category_id: int) -> None:
        super().__init__(3001, f"Category not found: {category_id}", 404)


# --- 4xxx: Transactions ---

class TransactionNotFoundError(AppError):
    def __init__(self, transaction_id: int) -> None:
        super().__init__(4001, f"Transaction not found: {transaction_id}", 404)


class ReferenceNotFoundError(AppError):
    """A write references a user, account or category that does not exist."""

    def __init__(self, reference: str, reference_id: int | None = None) -> None:
        self.reference = reference
        self.reference_id = reference_id
        detail = f"{reference} {reference_id}" if reference_id is not None else reference
        super().__init__(4002, f"Referenced {detail} does not exist", 422)


# --- 5xxx: Financial goals ---

class GoalNotFoundError(AppError):
    def __init__(self, goal_id: int) -> None:
        super().__init__(5001, f"Financial goal not found: {goal_id}", 404)


# --- 6xxx: Reports ---

class ReportDecodeError(AppError):
    def __init__(self, report_id: int) -> None:
        super().__init__(6001, f"Stored report {report_id} has malformed content", 500)


# --- 9xxx: System ---

class StoreError(AppError):
    def __init__(self, detail: str = "Backing store failure") -> None:
        super().__init__(9003, detail, 503)


class ValidationFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9004, f"Validation failed: {detail}", 422)


# --- Startup: migrations ---

class MigrationError(Exception):
    """Base for failures that must abort startup."""


class ConfigurationError(MigrationError):
    """Ledger table missing, or migrations directory / script unreadable."""


class ScriptExecutionError(MigrationError):
    def __init__(self, script: str, cause: Exception) -> None:
        self.script = script
        self.cause = cause
        super().__init__(f"Failed to execute migration {script}: {cause}")
