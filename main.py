import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from lawdesk.core.config import settings
from lawdesk.main import create_app

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=False)
