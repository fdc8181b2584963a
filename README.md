# shortlink

A small URL shortener web service. It stores links in a SQLite database,
hands out random six-character codes, redirects visitors to the original
address and counts every visit.

## Installing

    pip install .

## Running the server

    shortlink

By default the server listens on `0.0.0.0:8080` and keeps its data in
`url-shortener.db` in the current directory. Options:

- `--db PATH` – SQLite database file
- `--host ADDRESS` – address to listen on
- `--port PORT` – port to listen on

The server stops cleanly on SIGINT (Ctrl+C) or SIGTERM, waiting up to
30 seconds for outstanding requests, and closes the database. The command
exits with status 1 if the database cannot be opened or the port cannot be
bound.

## HTTP API

### Shorten a URL

    POST /api/shorten
    Content-Type: application/json

    {"url": "https://example.com/some/long/path"}

Responses:

- `201 Created` with `{"short_url": "aB3xY9"}`
- `400 Bad Request` with `{"error": "Invalid request format"}` if the body
  is not a JSON object or its `url` field is missing or empty
- `400 Bad Request` with
  `{"error": "Invalid URL format. URL must start with http:// or https://"}`
  if the URL is not an absolute `http` or `https` URL with a host
- `500 Internal Server Error` if the link cannot be stored

If a randomly chosen code is already taken, a new one is drawn until a free
one is found.

### Follow a short link

    GET /<short>

Answers `302 Found` with a `Location` header pointing at the original URL
and adds one to the link's visit count. Unknown codes give
`404 Not Found` with `{"error": "URL not found"}`.

### Link statistics

    GET /api/stat/<short>

    {
      "short_url": "aB3xY9",
      "original_url": "https://example.com/some/long/path",
      "visit_count": 3,
      "created_at": "2024-01-01T12:00:00Z",
      "updated_at": "2024-01-01T12:30:00Z"
    }

Times are given in RFC 3339 form, in UTC. Unknown codes give
`404 Not Found` with `{"error": "URL not found"}`.

## Using it from Python

    from shortlink.server import build_app

    app = build_app("links.db")
    app.run(port=8080)

The pieces can also be put together by hand:

    from shortlink.storage import Storage
    from shortlink.repository import SQLiteRepository
    from shortlink.service import URLService
    from shortlink.handlers import create_app

    storage = Storage("links.db")
    service = URLService(SQLiteRepository(storage), 6)
    app = create_app(service)

`Storage` is also a context manager that closes the database on exit.

`URLService.create`, `URLService.resolve` and `URLService.get_stat` work
without the web layer. When a code is unknown they raise
`shortlink.service.NotFoundError`. `shortlink.handlers.validate_url` is the
check applied to submitted URLs, and `shortlink.shortener.random_url`
produces the random codes (eight characters when the length given is not
positive).

## What it does not do

There is no authentication, no way to choose a custom code, and no way to
delete or edit a link once it is stored.

## Running the tests

    pip install ".[test]"
    pytest