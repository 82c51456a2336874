"""HTTP and WebSocket command surface for snake games."""
