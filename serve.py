import uvicorn

from app.core.config import CONFIG


def main():
    uvicorn.run("app.main:app", host=CONFIG.HOST, port=CONFIG.PORT)


if __name__ == "__main__":
    main()
