from .payloads import TEST_URL, TEST_REMOTE_URL, TRANSACTION_JSON, TEMPLATE_JSON, endpoint_url

__all__ = ["TEST_URL", "TEST_REMOTE_URL", "TRANSACTION_JSON", "TEMPLATE_JSON", "endpoint_url"]
