# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Walkthrough of the less common Web API operations.

This example shows:
- Creating with returned data and paging through results
- Associating and disassociating records
- Calling functions and actions
- Sending a $batch request with a change set and reads
- Cleanup

Prerequisites:
- pip install xrm-webapi
- pip install azure-identity
"""

import sys
import uuid

from azure.identity import InteractiveBrowserCredential

from xrm_webapi import ChangeSet, FunctionInput, Guid, QueryOptions, WebApiClient, WebApiConfig
from xrm_webapi.core.telemetry import TelemetryConfig


def log_call(description):
    print(f"\n→ {description}")


def section(title):
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def main():
    base_url = input("Enter Dataverse org URL (e.g. https://yourorg.crm.dynamics.com): ").strip()
    if not base_url:
        print("No URL entered; exiting.")
        sys.exit(1)

    config = WebApiConfig(telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG"))
    client = WebApiClient(base_url.rstrip("/"), InteractiveBrowserCredential(), config)
    created_ids = []

    try:
        section("1. Create with returned data")
        log_call("client.records.create_with_return_data('accounts', {...}, '$select=name,accountid')")
        account = client.records.create_with_return_data(
            "accounts", {"name": "Walkthrough Account"}, "$select=name,accountid"
        )
        account_id = Guid(account["accountid"])
        created_ids.append(("accounts", account_id))
        print(f"✓ {account['name']} ({account_id})")

        contact = client.records.create("contacts", {"firstname": "Walk", "lastname": "Through"})
        created_ids.append(("contacts", contact.id))
        print(f"✓ Contact {contact.id}")

        section("2. Associations")
        log_call("client.associations.associate(...)")
        client.associations.associate("accounts", account_id, "contact_customer_accounts", "contacts", contact.id)
        log_call("client.associations.disassociate(...)")
        client.associations.disassociate("accounts", account_id, "contact_customer_accounts", contact.id)

        section("3. Functions and actions")
        log_call("client.actions.unbound_function('WhoAmI')")
        who = client.actions.unbound_function("WhoAmI")
        print(f"✓ UserId: {who['UserId']}")
        log_call("client.actions.unbound_function('RetrieveVersion')")
        print(f"✓ Version: {client.actions.unbound_function('RetrieveVersion')['Version']}")
        log_call("client.actions.unbound_function('RetrieveTotalRecordCount', [...])")
        counts = client.actions.unbound_function(
            "RetrieveTotalRecordCount", [FunctionInput("EntityNames", '["account","contact"]')]
        )
        print(f"✓ {counts}")

        section("4. Batch")
        log_call("client.batch.execute(...)")
        response = client.batch.execute(
            uuid.uuid4().hex,
            uuid.uuid4().hex,
            [ChangeSet("accounts", {"name": "Batch A"}), ChangeSet("accounts", {"name": "Batch B"})],
            ["accounts?$select=name&$filter=startswith(name,'Batch')"],
        )
        for item in response.change_set_items:
            entity_id = item.headers.get("OData-EntityId")
            print(f"  change set part {item.content_id}: {item.status_code} {entity_id}")
            if entity_id:
                created_ids.append(("accounts", Guid(entity_id[entity_id.rfind("(") + 1 : -1])))
        for item in response.read_items:
            rows = item.body.get("value", []) if isinstance(item.body, dict) else []
            print(f"  read: {item.status_code} ({len(rows)} rows)")
        if response.has_errors:
            print(f"✗ {len(response.errors)} part(s) failed")

        section("5. Paging")
        for i, page in enumerate(
            client.records.iter_pages("accounts", "$select=name", QueryOptions(max_page_size=2))
        ):
            print(f"  page {i}: {[row['name'] for row in page['value']]}")
            if i >= 2:
                break
    finally:
        section("6. Cleanup")
        for entity_set, id in created_ids:
            log_call(f"client.records.delete('{entity_set}', {id})")
            client.records.delete(entity_set, id)
        client.close()


if __name__ == "__main__":
    main()
