class ClonerException(Exception):
    """Base exception for all repo-cloner errors."""
    pass

class ConfigurationError(ClonerException):
    """Raised when required configuration is missing or invalid."""
    pass

class GitHubAPIError(ClonerException):
    """Raised when the GitHub REST API answers with a non-success status."""
    def __init__(self, status: int, body: str, url: str = ""):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"GitHub API returned {status} for {url}: {body}")

class ResponseDecodeError(ClonerException):
    """Raised when a response body is not JSON of the expected shape."""
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not decode response from {url}: {reason}")

class CloneLaunchError(ClonerException):
    """Raised when the git executable cannot be started."""
    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to launch '{command}': {reason}")
