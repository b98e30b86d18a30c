# Header identifying the acting user, sent by clients to the gateway and forwarded to the server
SHARER_USER_ID_HEADER = "X-Sharer-User-Id"
