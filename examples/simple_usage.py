#!/usr/bin/env python3
"""
Simple example of using the Chain SDK.
"""
import logging

from chain_sdk import (
    APIError, Builder, ClientConfig, Context, ControlWithAccount, Issue,
    QueryBuilder, submit
)


def sign(template):
    """
    Placeholder for an external signer (HSM, key store, ...).

    A real signer fills in the ``signatures`` of each signature witness
    component listed in ``template.signing_instructions``.
    """
    return template


def main():
    """
    Demonstrate basic usage of the Chain SDK.

    This example shows how to:
    1. Configure a context from CHAIN_* environment variables
    2. Build a transaction issuing an asset to an account
    3. Sign and submit it
    4. List recent transactions
    """
    logging.basicConfig(level=logging.INFO)
    ctx = Context.from_config(ClientConfig.from_env())

    template = (
        Builder()
        .add_action(Issue().set_asset_alias("gold").set_amount(100))
        .add_action(
            ControlWithAccount()
            .set_account_alias("alice")
            .set_asset_alias("gold")
            .set_amount(100)
        )
        .add_reference_data_field("note", "example issuance")
        .build(ctx)
    )
    print(f"Built template with {len(template.signing_instructions)} signing instruction(s)")

    try:
        response = submit(ctx, sign(template))
        print(f"Submitted transaction {response.id}")
    except APIError as e:
        print(f"Submission rejected: {e}")
        return

    page = QueryBuilder().set_filter("inputs(asset_alias=$1)").add_filter_parameter("gold").execute(ctx)
    for tx in page.items:
        print(tx.id, tx.timestamp, len(tx.inputs), "inputs", len(tx.outputs), "outputs")


if __name__ == "__main__":
    main()
