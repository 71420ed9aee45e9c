"""
Integration tests for the compress client.

Exercise CompressClient, RetryEngine and HttpxTransport together against an
in-process service double (httpx.MockTransport). Waits are replaced with a
recording coroutine, so the suite never sleeps and never touches the network.
"""
