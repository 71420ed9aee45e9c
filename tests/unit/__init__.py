"""
Unit tests for the compress client.

Test individual components in isolation:
- Cost estimator (timeout bands, poll delay, backoff)
- Data models (identity resolution, wire serialization)
- Response classification
- Retry engine (state machine with mocked transport and sleep)
- httpx transport (via httpx.MockTransport)
- Client facade
"""
