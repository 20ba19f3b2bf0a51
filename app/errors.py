class TaskFlowError(Exception):
    """Base for every error the app reports back to the page.

    ``status_code`` is the HTTP status the routers answer with and ``title``
    is the heading of the notification shown to the user.
    """

    status_code = 400
    title = "Error"
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class CredentialError(TaskFlowError):
    title = "Validation Error"


class AuthInProgress(TaskFlowError):
    status_code = 409
    title = "Please wait"
    default_message = "Authentication already in progress"


class AuthCancelled(TaskFlowError):
    status_code = 409
    title = "Authentication Cancelled"
    default_message = "Authentication cancelled"


class NotAuthenticated(TaskFlowError):
    status_code = 401
    title = "Not authenticated"
    default_message = "Not authenticated"


class TaskValidationError(TaskFlowError):
    title = "Validation Error"


class TaskNotFound(TaskFlowError):
    status_code = 404
    title = "Task Not Found"
    default_message = "Task not found"


class NoEditTarget(TaskFlowError):
    status_code = 409
    title = "Nothing To Update"
    default_message = "No task is being edited"


class AlreadyAuthenticated(TaskFlowError):
    status_code = 409
    title = "Already signed in"
    default_message = "Already signed in; log out first"
