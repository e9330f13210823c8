from server import server

# Entry point for `uvicorn main:server_app`.
server_app = server.handler
