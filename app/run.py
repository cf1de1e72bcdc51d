import uvicorn
from dotenv import load_dotenv

from app.utils.config import Settings

# Load environment variables from .env, overriding any existing ones
load_dotenv(override=True)


# Start the server
def start():
    """Launches the Uvicorn server."""
    settings = Settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
