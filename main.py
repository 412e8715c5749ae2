from lunch_api.application import create_app
from lunch_api.core.config import get_settings

app = create_app(get_settings())

if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
