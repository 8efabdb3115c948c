"""
Shared constants and sample payloads for the Chain SDK tests.
"""

# Constants for testing
TEST_URL = "http://localhost:1999"
TEST_REMOTE_URL = "https://chain.example.com"

TRANSACTION_JSON = {
    "id": "b8e3c2f1a0d94c7e8f6a5b4c3d2e1f0a9b8c7d6e5f4a3b2c1d0e9f8a7b6c5d4e",
    "block_id": "4f2e9d1c8b7a6f5e4d3c2b1a0f9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b3a2f1e",
    "block_height": 42,
    "position": 1,
    "timestamp": "2017-03-14T15:09:26Z",
    "reference_data": {"invoice": "INV-7", "tags": {"region": "eu"}},
    "is_local": "yes",
    "inputs": [
        {
            "action": "spend_account",
            "amount": 100,
            "asset_id": "a1" * 32,
            "asset_tags": {"type": "currency"},
            "asset_is_local": "yes",
            "account_id": "acc0001",
            "account_tags": {"owner": "alice"},
            "input_witness": ["deadbeef", "cafe"],
            "reference_data": {},
            "is_local": "yes"
        }
    ],
    "outputs": [
        {
            "action": "control_account",
            "purpose": "receive",
            "amount": 60,
            "asset_id": "a1" * 32,
            "asset_tags": {"type": "currency"},
            "asset_is_local": "yes",
            "control_program": "766baa20",
            "position": 0,
            "account_id": "acc0002",
            "account_tags": {"owner": "bob"},
            "reference_data": {"memo": "lunch"},
            "is_local": "yes"
        },
        {
            "action": "control_account",
            "purpose": "change",
            "amount": 40,
            "asset_id": "a1" * 32,
            "asset_is_local": "yes",
            "control_program": "766baa21",
            "position": 1,
            "account_id": "acc0001",
            "reference_data": {},
            "is_local": "yes"
        }
    ]
}

TEMPLATE_JSON = {
    "raw_transaction": "0701000100",
    "signing_instructions": [
        {
            "asset_id": "a1" * 32,
            "amount": 100,
            "position": 0,
            "witness_components": [
                {
                    "type": "signature",
                    "quorum": 1,
                    "keys": [{"xpub": "xpub0001", "derivation_path": ["0100", "0200"]}],
                    "program": "ae20",
                    "signatures": []
                },
                {"type": "data", "data": "beef"}
            ]
        }
    ],
    "local": True,
    "allow_additional_actions": False
}


def endpoint_url(endpoint: str) -> str:
    return f"{TEST_URL}/{endpoint}"
