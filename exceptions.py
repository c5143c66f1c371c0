"""
Relay errors.

Each error carries its HTTP status and the message returned to the caller,
so route code never picks these at the call site. main.py renders them as
{"error": message}.
"""


class RelayError(Exception):
    status_code = 500
    message = "Failed to delete media"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(RelayError):
    status_code = 400
    message = "public_id is required"


class CredentialsUnavailable(RelayError):
    status_code = 400
    message = (
        "Missing credentials. Provide 'cloud_name' or 'secure_url' and "
        "configure CLOUDINARY_ACCOUNTS_JSON or default envs."
    )


class UpstreamError(RelayError):
    status_code = 500
    message = "Failed to delete media"
