"""Financial reporting for the storefront.

Two flavours of report live here. Query reports aggregate sales and
expenses on demand for any single day or trailing window, straight from the
transaction tables. Daily reports are immutable snapshots written once per
business day by the scheduled job (or an admin-triggered run); the records
they fold in are flagged as processed so no later run counts them twice."""
