from api.app import create_app
from bookfromhub.logging import configure_logging
from bookfromhub.settings import get_settings

configure_logging(get_settings().log_level)

app = create_app()
