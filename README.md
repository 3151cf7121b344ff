# pyrhouse

Building blocks for a warehouse inventory service. The package has services for assets with PYR codes, item categories, item lookup across assets and stock, audit log entries and CSV reports. It also has helpers that turn spreadsheet values into delivery quests and duty schedules, and a client for the Jira Service Desk request API.

The services do not talk to a database themselves. Each one is given the objects it works with, such as an asset repository, a category repository or an audit log. These can be any objects that have the methods the service calls.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Modules

### `pyrhouse.models`

This module holds dataclasses for the domain records:

- `Location`, `ItemCategory`, `Asset` (with `to_dict()`), `StockItem`, `Transfer` and `TransferUser`.
- The request types `ItemRequest`, `BulkItemRequest`, `EmergencyAssetRequest` and `DeliveryLocation`. `EmergencyAssetRequest` raises `ValueError` when its quantity is below 1.
- The exceptions `UniqueViolationError` and `ForeignKeyViolationError`.

### `pyrhouse.assets`

- `format_pyr_code(pyr_id, number)` returns `"PYR-<pyr_id><number>"`.
- `apply_request_defaults(location_id, status, origin)` replaces a location of 0 with `1` and an empty status with `"available"`. It raises `ValueError` when the origin is empty.
- `AssetService(assets, categories, audit_log)` creates assets. Each request is checked against its category, and the category's type must be `"asset"`. Each new asset then gets a PYR code from the repository. If a code cannot be generated or stored, that asset is removed again.
  - `create_bulk_assets(request)` creates one asset per serial number and returns `(created, errors)`. If any serial fails, every asset created by the call is removed, and `created` comes back empty.
  - `create_assets_without_serial(request)` creates `request.quantity` assets that have no serial number. It raises `RuntimeError` at the first failure. Assets already created by the same call are kept.
  - `remove_assets(assets)` removes the given assets and stops at the first failure.
  - `update_asset_location(asset_id, location)` writes a `last_known_location` audit entry.

### `pyrhouse.categories`

- `CategoryService(repository, name_from_label, pyr_id_generator)` creates and updates categories. The two callables derive a category's name and propose a PYR id.
  - In `create_category`, the label is required and the type defaults to `"asset"`.
  - `generate_unique_pyr_id` tries the suffixes 1 to 9 when the proposed id is taken.
  - `update_category` refuses a PYR id that another category already uses.
- `build_category_updates(category_id, label, category_type, pyr_id, has_related_items)` collects the fields of a partial update.
  - It raises `ForeignKeyViolationError` when the type would change while items still belong to the category.
  - It raises `ValueError` when nothing would change.

### `pyrhouse.items`

- `ItemQuery` names one item by id and category type. `ItemListQuery` holds list filters and offers `add_condition`, `build_conditions` and `has_conditions`.
- `ItemService(assets, stocks, audit_logs)`:
  - `fetch_item` returns the item together with its audit log entries. It raises `ValueError` for a type other than `"asset"` or `"stock"`.
  - `fetch_item_list` returns assets, stock, or both when no type is given.
- `parallel_fetch(*fetchers)` runs the fetchers in threads. It joins their results in fetcher order.

### `pyrhouse.inventory_log`

`InventoryLog(audit_log)` writes audit entries through the given audit log:

- `delivery_location_entry` and `asset_entry` write entries for assets.
- `transfer_entry` writes one entry for the transfer and one for each moved asset and stock item. It does this only for the actions `delivered`, `in_transfer` and `cancelled`.
- `transfer_user_entry` writes an entry for a user assigned to a transfer.

### `pyrhouse.reports`

`assets_report_csv(rows)` and `stock_report_csv(rows)` turn `AssetReportRow` and `StockReportRow` records into CSV text, header line included.

### `pyrhouse.sheets`

- `map_headers` maps the recognised spreadsheet headers to field names.
- `parse_quests` groups rows into `Quest` records. Rows are grouped by recipient, delivery date, location and pavilion.
- `filter_quests_by_status(quests, status)` works as follows:
  - `"delivered"` keeps quests marked `Wysłane`.
  - An empty status keeps quests marked `Zamówione` or `Zatwierdzone`.
  - Any other status yields nothing.
- `quests_from_values` parses the values and then filters them.

### `pyrhouse.duty`

- `parse_duty_schedule(values)` reads a duty rota into `DutySchedule` records. Tuesday to Thursday are single cells. Friday to Sunday are hourly columns keyed by their header labels.
- `schedule_for_person(schedules, person_name, today)` collects one person's shifts as `DutyScheduleResponse` records. It uses `split_time_slot` and `parse_time_slot` for labels such as `"10:00 - 11:00"`.

### `pyrhouse.jira`

`JiraService(base_url, email, token, service_desk_id)` is a client for the Service Desk request API. It offers:

- `get_tasks`
- `get_comments`
- `get_task`
- `get_task_with_comments`
- `change_status`

Error answers and unreadable bodies raise `JiraError`.

`JiraService.from_env()` reads `JIRA_BASE_URL`, `JIRA_EMAIL`, `JIRA_API_TOKEN` and `JIRA_SERVICE_DESK_ID` from the environment or from a `.env` file.

## Examples

```python
from pyrhouse.sheets import quests_from_values

values = [
    ["Rzeczy", "Ilość", "Do kogo ma trafić", "Stan"],
    ["Kabel HDMI", "3", "Scena A", "Zamówione"],
    ["Projektor", "1", "Scena A", "Zamówione"],
]
for quest in quests_from_values(values, ""):
    print(quest.recipient, [item.item_name for item in quest.items])
```

```python
from pyrhouse.jira import JiraService

jira = JiraService.from_env()
for issue in jira.get_tasks("", "50", "0"):
    print(issue.issue_key, issue.summary)
```

## What the package does not do

- It has no HTTP server, routes or authorisation.
- It has no database storage or migrations. Repositories and the audit log are supplied by the caller.
- It does not read spreadsheets from any online service. It only parses values that are already loaded.
- It provides no command-line program.

## Running the tests

```
pytest
```