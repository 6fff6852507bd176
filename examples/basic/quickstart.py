# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Quickstart: create, read, update and delete an account through the Web API.

Prerequisites:
- pip install xrm-webapi
- pip install azure-identity
"""

import sys

from azure.identity import InteractiveBrowserCredential

from xrm_webapi import QueryOptions, ServiceError, WebApiClient


def log_call(description):
    print(f"\n→ {description}")


def main():
    base_url = input("Enter Dataverse org URL (e.g. https://yourorg.crm.dynamics.com): ").strip()
    if not base_url:
        print("No URL entered; exiting.")
        sys.exit(1)

    credential = InteractiveBrowserCredential()

    with WebApiClient(base_url.rstrip("/"), credential) as client:
        log_call("client.records.create('accounts', {...})")
        created = client.records.create("accounts", {"name": "Quickstart Account", "revenue": 1000})
        print(f"✓ Created {created.id} at {created.uri}")

        try:
            log_call("client.records.retrieve('accounts', id, '$select=name,revenue')")
            account = client.records.retrieve(
                "accounts",
                created.id,
                "$select=name,revenue",
                QueryOptions(include_formatted_values=True),
            )
            print(f"✓ Name: {account['name']}")
            print(f"  Revenue: {account.get('revenue@OData.Community.Display.V1.FormattedValue')}")

            log_call("client.records.update_property('accounts', id, 'name', ...)")
            client.records.update_property("accounts", created.id, "name", "Quickstart Account (renamed)")

            log_call("client.records.delete_property('accounts', id, 'revenue')")
            client.records.delete_property("accounts", created.id, "revenue")

            log_call("client.records.retrieve_multiple('accounts', \"$filter=startswith(name,'Quickstart')\")")
            page = client.records.retrieve_multiple("accounts", "$select=name&$filter=startswith(name,'Quickstart')")
            for row in page["value"]:
                print(f"  - {row['name']}")
        except ServiceError as ex:
            print(f"✗ Request failed ({ex.status_code}): {ex.message}")
            if ex.error:
                print(f"  Service error: {ex.error}")
        finally:
            log_call("client.records.delete('accounts', id)")
            client.records.delete("accounts", created.id)
            print("✓ Deleted")


if __name__ == "__main__":
    main()
