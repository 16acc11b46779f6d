from typing import Optional

from .api.client import CheckinServiceClient
from .core.config import configure_logging, get_settings, initialize_env
from .core.view_model import CheckinViewModel


def create_view_model(base_url: Optional[str] = None) -> CheckinViewModel:
    initialize_env()
    settings = get_settings()
    configure_logging(settings.log_level)
    client = CheckinServiceClient(base_url or settings.backend_url, timeout=settings.request_timeout)
    return CheckinViewModel(client)
