"""Live integration tests that hit a real Ollama instance.

These tests are separated from unit tests because they:
- Make real network requests to the Ollama endpoint
- Take longer to run (model inference, seconds per call)
- Require the aidapal model to be pulled (or OLLAMA_MODEL to name another)

Run with: pytest tests/live/ -v
Skip with: pytest tests/ --ignore=tests/live/
"""
