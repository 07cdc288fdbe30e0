import uvicorn

from social_events.services.db import HOST, PORT


def main():
    uvicorn.run("social_events.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
