import logging
import sys

from config import settings
from models.schemas import Credentials
from services.call2fa import place_call

# Verbosity comes from LOG_LEVEL, e.g. `LOG_LEVEL=DEBUG python example.py`
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

CALL_TO = "+380631010121"
CALLBACK_URL = "https://httpbin.org/post"

def main() -> int:
    credentials = Credentials(login=settings.CALL2FA_LOGIN, password=settings.CALL2FA_PASSWORD)
    print(f"Attempting to call {CALL_TO}...")
    result = place_call(CALL_TO, credentials, callback_url=CALLBACK_URL)
    if not result.success:
        print("Something went wrong:", file=sys.stderr)
        print(result.error, file=sys.stderr)
        return 1
    print("Call initiated successfully.")
    print(f"call_id: {result.remote_identifier}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
