from app.config import get_settings
from app.main import configure_logging, create_app

settings = get_settings()
configure_logging(settings.log_level)

app = create_app(settings)
