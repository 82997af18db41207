"""
GenAI Gateway package.

Provides:
- HTTP endpoints that forward text, image, document and audio requests to Gemini
- A uvicorn entrypoint for serving the FastAPI app
"""
