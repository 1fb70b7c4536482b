"""Internal constants shared across the library."""

_SHEET_ENDPOINT = (
    "https://script.google.com/macros/s/"
    "AKfycbwXIfuadHykMFrMdPPLLP7y0pm4oZ8TJUnM9SMmDp9BkaVLGu9jupU-CuW8Id-Mm1ylxg/exec"
)

SUBJECTS_URL = f"{_SHEET_ENDPOINT}?sheetname=user"
TICKETS_URL = f"{_SHEET_ENDPOINT}?sheetname=ticket"
USER_AGENT = "ticketsync/0.1"

DEFAULT_POLL_INTERVAL: float = 2.0
DEFAULT_HTTP_TIMEOUT: float = 30.0

ADMIN_PREFIX = "/admin"
FALLBACK_PATH = "/invalid"

# ------------------------------------------------------------------
# URL query parameters
# ------------------------------------------------------------------

SUBJECT_PARAM = "id"
TICKET_PARAM = "ticketId"
