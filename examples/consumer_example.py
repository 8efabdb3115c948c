#!/usr/bin/env python3
"""
Example of processing new transactions with a transaction consumer.
"""
import os

from chain_sdk import APIError, ClientConfig, Consumer, Context, QueryBuilder


def main():
    """
    Poll a consumer's filter and advance its cursor after each batch.

    The consumer is created on first run and looked up by alias afterwards,
    so a restarted process resumes where the previous one stopped.
    """
    ctx = Context.from_config(ClientConfig.from_env())
    alias = os.environ.get("CONSUMER_ALIAS", "payments-to-alice")

    try:
        consumer = Consumer.get_by_alias(ctx, alias)
    except APIError:
        consumer = Consumer.create(ctx, alias, "outputs(account_alias='alice')")

    while True:
        query = QueryBuilder().set_filter(consumer.filter).set_ascending().set_timeout(5000)
        if consumer.after:
            query.set_after(consumer.after)
        page = query.execute(ctx)

        for tx in page.items:
            print(f"New transaction {tx.id} at block {tx.block_height}")

        if page.items:
            consumer = consumer.update(ctx, page.next.after)


if __name__ == "__main__":
    main()
