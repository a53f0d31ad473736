# sheet_manager.py

import argparse
import math
import os
import re
import sys
import time
import traceback
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

import smartsheet

from config import (
    COMPLETION_STATUSES,
    DATE_FORMAT,
    REGISTRY_HEADERS,
    ROW_DELAY_SECONDS,
    SHEET_CONFIG,
    SUCCESS_STATUS,
    TEMPLATE_ACTIVE_STATUS,
    TEMPLATE_NOT_FOUND_STATUS,
    TEMPLATE_TIMESTAMP_FORMAT,
)

# Registry fields in column order, paired with REGISTRY_HEADERS
ROW_FIELDS = [
    'template_name', 'owner_label', 'contact_email', 'linked_sheet_url',
    'status', 'created_at', 'total', 'completed', 'pending', 'overdue',
    'not_estimated', 'progress',
]
FIELD_TO_HEADER = dict(zip(ROW_FIELDS, REGISTRY_HEADERS))
TEXT_FIELDS = ROW_FIELDS[:6]
METRIC_FIELDS = ROW_FIELDS[6:]
METRIC_HEADERS = REGISTRY_HEADERS[6:]

REFERENCE_LABELS = {
    'title': 'Title',
    'status': 'Status',
    'due_date': 'Due Date',
    'estimated': 'Estimated',
}

# ============================================================================
# ERRORS
# ============================================================================

class SheetManagerError(Exception):
    """Base class for registry and provisioning failures."""


class TemplateNotFound(SheetManagerError):
    pass


class CopyFailed(SheetManagerError):
    pass


class InvalidReference(SheetManagerError):
    pass


class ShareFailed(SheetManagerError):
    """Granting access failed. Never fatal for the row being provisioned."""


# ============================================================================
# DATA MODEL
# ============================================================================

@dataclass
class RegistryRow:
    """One managed sheet tracked in the registry."""
    row_index: Optional[int] = None
    template_name: str = ''
    owner_label: str = ''
    contact_email: str = ''
    linked_sheet_url: str = ''
    status: str = ''
    created_at: str = ''
    total: Any = None
    completed: Any = None
    pending: Any = None
    overdue: Any = None
    not_estimated: Any = None
    progress: Any = None


@dataclass
class DashboardRecord:
    card_title: str
    template_name: str
    sheet_url: str
    total: Any = 0
    completed: Any = 0
    pending: Any = 0
    overdue: Any = 0
    not_estimated: Any = 0
    progress: Any = 0


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_column_map_by_name(sheet):
    return {column.title: column.id for column in sheet.columns}

def cell_text(value):
    if value is None:
        return ''
    return str(value).strip()

def to_metric(value):
    """
    Converts a metric cell value to a number. Blank, boolean, non-numeric and
    non-finite values count as 0. A trailing '%' is ignored.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        text = value.strip().rstrip('%').strip()
        try:
            value = float(text)
        except ValueError:
            return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value) if value.is_integer() else value
    if isinstance(value, int):
        return value
    return 0

def find_sheet_by_name(smart, sheet_name):
    for sheet in smart.Sheets.list_sheets(include_all=True).data:
        if sheet.name == sheet_name:
            return sheet
    return None

def create_sheet_with_headers(smart, sheet_name, headers, date_columns=()):
    """
    Creates a sheet whose columns are `headers`. The first header becomes the
    primary column; titles listed in `date_columns` get the DATE type.
    """
    columns = []
    for index, title in enumerate(headers):
        column = {'title': title, 'type': 'DATE' if title in date_columns else 'TEXT_NUMBER'}
        if index == 0:
            column['primary'] = True
        columns.append(column)
    response = smart.Home.create_sheet(smartsheet.models.Sheet({'name': sheet_name, 'columns': columns}))
    return response.result

# --- IDENTIFIER EXTRACTOR ---

CONTAINER_PATH_PATTERN = re.compile(r'/(?:spreadsheets/d|sheets|sheet)/([A-Za-z0-9_-]+)')
QUERY_PARAM_PATTERN = re.compile(r'[?&](?:id|sheetId)=([A-Za-z0-9_-]+)')
LONG_TOKEN_PATTERN = re.compile(r'[A-Za-z0-9_-]{25,}')

def match_container_path(url):
    match = CONTAINER_PATH_PATTERN.search(url)
    return match.group(1) if match else None

def match_query_param(url):
    match = QUERY_PARAM_PATTERN.search(url)
    return match.group(1) if match else None

def match_long_token(url):
    tokens = LONG_TOKEN_PATTERN.findall(url)
    if not tokens:
        return None
    return max(tokens, key=len)

SHEET_ID_STRATEGIES = (match_container_path, match_query_param, match_long_token)

def extract_sheet_id(url):
    """
    Returns the sheet identifier embedded in a sheet URL.
    Strategies are tried in order and the first match wins. Raises
    InvalidReference when none of them matches.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidReference(f"Invalid sheet URL: {url!r}")
    for strategy in SHEET_ID_STRATEGIES:
        identifier = strategy(url)
        if identifier:
            return identifier
    raise InvalidReference(f"Invalid sheet URL: {url}")

def resolve_sheet_id(smart, identifier):
    """
    Maps an extracted identifier to a numeric Smartsheet sheet ID.
    Digit-only identifiers already are sheet IDs; anything else is treated as
    a permalink token and matched against the sheets visible to the caller.
    """
    if identifier.isdigit():
        return int(identifier)
    for sheet in smart.Sheets.list_sheets(include_all=True).data:
        permalink = sheet.permalink or ''
        if permalink.rstrip('/').endswith('/' + identifier):
            return sheet.id
    raise InvalidReference(f"No accessible sheet matches reference '{identifier}'")

# --- TITLE DERIVER ---

def first_token(value, placeholder, split_email=False):
    text = cell_text(value)
    token = text.split(' ')[0] if text else ''
    if split_email:
        token = token.split('@')[0]
    return token or placeholder

def derive_title(template_name, owner_label):
    """
    Builds '<first word of template> Sheet <first word of owner>'.
    An e-mail owner contributes its local part, e.g. 'Task Sheet jane'.
    """
    template_word = first_token(template_name, 'Template')
    owner_word = first_token(owner_label, 'User', split_email=True)
    return f"{template_word} Sheet {owner_word}"

# ============================================================================
# REGISTRY STORE
# ============================================================================

class RegistryStore:
    """
    Read/write handle on the registry sheet. Every load_all() re-reads the
    sheet; only the row number -> row ID and title -> column ID maps are
    kept between calls.
    """

    def __init__(self, smart, sheet_id):
        self.smart = smart
        self.sheet_id = sheet_id
        self.column_map = {}
        self.row_ids = {}

    @classmethod
    def open(cls, smart, config=SHEET_CONFIG):
        sheet_id = config.get('registry_sheet_id')
        if not sheet_id:
            sheet_name = config['registry_sheet_name']
            existing = find_sheet_by_name(smart, sheet_name)
            if existing is not None:
                sheet_id = existing.id
            else:
                print(f"Registry sheet '{sheet_name}' not found. Creating it...")
                sheet_id = create_sheet_with_headers(smart, sheet_name, REGISTRY_HEADERS).id
                print(f"  Created registry sheet '{sheet_name}' (ID: {sheet_id})")
        store = cls(smart, sheet_id)
        store.load_all()
        missing = [title for title in REGISTRY_HEADERS if title not in store.column_map]
        if missing:
            raise SheetManagerError(f"Registry sheet {sheet_id} is missing columns: {', '.join(missing)}")
        return store

    def load_all(self):
        sheet = self.smart.Sheets.get_sheet(self.sheet_id)
        self.column_map = get_column_map_by_name(sheet)
        self.row_ids = {}
        rows = []
        for sheet_row in sheet.rows:
            values = {}
            for field_name, title in FIELD_TO_HEADER.items():
                column_id = self.column_map.get(title)
                cell = sheet_row.get_column(column_id) if column_id else None
                values[field_name] = cell.value if cell else None
            for field_name in TEXT_FIELDS:
                values[field_name] = cell_text(values[field_name])
            rows.append(RegistryRow(row_index=sheet_row.row_number, **values))
            self.row_ids[sheet_row.row_number] = sheet_row.id
        return rows

    def _row_id(self, row_index):
        if row_index not in self.row_ids:
            self.load_all()
        if row_index not in self.row_ids:
            raise SheetManagerError(f"Registry row {row_index} does not exist")
        return self.row_ids[row_index]

    def _column_id(self, column_name):
        if column_name not in self.column_map:
            self.load_all()
        if column_name not in self.column_map:
            raise SheetManagerError(f"Registry column '{column_name}' does not exist")
        return self.column_map[column_name]

    def write_cells(self, row_index, values):
        cells = [
            smartsheet.models.Cell({'column_id': self._column_id(name), 'value': value})
            for name, value in values.items()
        ]
        update_row = smartsheet.models.Row({'id': self._row_id(row_index), 'cells': cells})
        self.smart.Sheets.update_rows(self.sheet_id, [update_row])

    def write_cell(self, row_index, column_name, value):
        self.write_cells(row_index, {column_name: value})

    def write_formulas(self, row_index, formulas):
        cells = [
            smartsheet.models.Cell({'column_id': self._column_id(name), 'formula': formula})
            for name, formula in formulas.items()
        ]
        update_row = smartsheet.models.Row({'id': self._row_id(row_index), 'cells': cells})
        self.smart.Sheets.update_rows(self.sheet_id, [update_row])

    def append_row(self, row):
        """Adds `row` at the bottom of the registry and returns its row number."""
        new_row = smartsheet.models.Row({'to_bottom': True, 'cells': []})
        for field_name in TEXT_FIELDS:
            value = getattr(row, field_name)
            if value:
                new_row.cells.append(smartsheet.models.Cell({
                    'column_id': self._column_id(FIELD_TO_HEADER[field_name]),
                    'value': value,
                }))
        added = self.smart.Sheets.add_rows(self.sheet_id, [new_row]).result[0]
        self.row_ids[added.row_number] = added.id
        return added.row_number

    def add_cross_sheet_reference(self, name, source_sheet_id, column_id):
        reference = smartsheet.models.CrossSheetReference({
            'name': name,
            'source_sheet_id': source_sheet_id,
            'start_column_id': column_id,
            'end_column_id': column_id,
        })
        self.smart.Sheets.create_cross_sheet_reference(self.sheet_id, reference)

# ============================================================================
# TEMPLATE CATALOG
# ============================================================================

def get_template_url(smart, config, template_name):
    """
    Looks up a template URL in the catalog sheet by exact trimmed name.
    The first column holds names, the second holds URLs.
    """
    sheet_id = config.get('catalog_sheet_id')
    if not sheet_id:
        catalog = find_sheet_by_name(smart, config['catalog_sheet_name'])
        if catalog is None:
            raise TemplateNotFound(f"Template catalog '{config['catalog_sheet_name']}' not found")
        sheet_id = catalog.id

    catalog_sheet = smart.Sheets.get_sheet(sheet_id)
    if len(catalog_sheet.columns) < 2:
        raise TemplateNotFound(f"Template catalog {sheet_id} needs a name and a URL column")
    name_col_id = catalog_sheet.columns[0].id
    url_col_id = catalog_sheet.columns[1].id

    wanted = cell_text(template_name)
    for row in catalog_sheet.rows:
        name_cell = row.get_column(name_col_id)
        if name_cell and cell_text(name_cell.value) == wanted:
            url_cell = row.get_column(url_col_id)
            if url_cell and cell_text(url_cell.value):
                return cell_text(url_cell.value)
    raise TemplateNotFound(f"Template '{wanted}' not found in catalog")

# ============================================================================
# PROVISIONING
# ============================================================================

def get_or_create_folder(smart, folder_name):
    for folder in smart.Home.list_folders(include_all=True).data:
        if folder.name == folder_name:
            return folder
    print(f"  Creating holding folder '{folder_name}'")
    return smart.Home.create_folder(smartsheet.models.Folder({'name': folder_name})).result

def copy_template(smart, template_url, sheet_name, folder_name):
    """
    Copies the template sheet into the holding folder under `sheet_name`.
    Returns a dict with the new sheet's ID, name and URL.
    """
    template_id = resolve_sheet_id(smart, extract_sheet_id(template_url))
    try:
        folder = get_or_create_folder(smart, folder_name)
        destination = smartsheet.models.ContainerDestination({
            'destination_type': 'folder',
            'destination_id': folder.id,
            'new_name': sheet_name,
        })
        copied = smart.Sheets.copy_sheet(template_id, destination, include='data').result
        sheet_url = copied.permalink or smart.Sheets.get_sheet(copied.id).permalink
    except Exception as e:
        raise CopyFailed(str(e)) from e
    return {'sheet_id': copied.id, 'sheet_name': sheet_name, 'sheet_url': sheet_url}

def share_sheet_with_user(smart, sheet_id, email, access_level='EDITOR'):
    share = smartsheet.models.Share({'email': email, 'access_level': access_level})
    try:
        smart.Sheets.share_sheet(sheet_id, share, send_email=False)
    except Exception as e:
        raise ShareFailed(f"Could not share sheet {sheet_id} with {email}: {e}") from e

def resolve_source_column(column_map, candidates):
    for title in candidates:
        if title in column_map:
            return column_map[title]
    raise SheetManagerError(f"Linked sheet has none of the columns: {', '.join(candidates)}")

def build_metric_formulas(row_index, reference_names):
    """
    Returns the six registry formulas for one row, keyed by column title.
    `reference_names` maps title/status/due_date/estimated to the names of
    cross-sheet references into the linked sheet.
    """
    title_ref = '{' + reference_names['title'] + '}'
    status_ref = '{' + reference_names['status'] + '}'
    due_ref = '{' + reference_names['due_date'] + '}'
    estimated_ref = '{' + reference_names['estimated'] + '}'
    is_completed = 'OR(' + ', '.join(f'@cell = "{status}"' for status in COMPLETION_STATUSES) + ')'

    total = f'[{METRIC_HEADERS[0]}]{row_index}'
    completed = f'[{METRIC_HEADERS[1]}]{row_index}'
    formulas = [
        f'=IFERROR(COUNT({title_ref}), 0)',
        f'=IFERROR(COUNTIF({status_ref}, {is_completed}), 0)',
        f'=IF({total} = 0, 0, {total} - {completed})',
        f'=IFERROR(COUNTIFS({due_ref}, @cell < TODAY(), {status_ref}, NOT({is_completed})), 0)',
        f'=IFERROR(COUNTIF({estimated_ref}, "No"), 0)',
        f'=IF({total} = 0, 0, ROUND({completed} / {total} * 100, 0))',
    ]
    return dict(zip(METRIC_HEADERS, formulas))

def install_metric_formulas(smart, store, row_index, linked_sheet_id, config=SHEET_CONFIG):
    """
    Creates the cross-sheet references into the linked sheet and writes the
    six metric formulas into the registry row.

    Every source column is resolved before any reference is created, and
    reference names are keyed on the linked sheet ID, so a failed row can be
    re-run without asking for a name that already exists.
    """
    linked_sheet = smart.Sheets.get_sheet(linked_sheet_id)
    linked_col_map = get_column_map_by_name(linked_sheet)

    source_columns = {
        key: resolve_source_column(linked_col_map, candidates)
        for key, candidates in config['metric_source_columns'].items()
    }

    reference_names = {}
    for key, column_id in source_columns.items():
        name = f"{linked_sheet_id} {REFERENCE_LABELS[key]}"
        store.add_cross_sheet_reference(name, linked_sheet_id, column_id)
        reference_names[key] = name

    store.write_formulas(row_index, build_metric_formulas(row_index, reference_names))

def record_row_error(store, row_index, status):
    try:
        store.write_cell(row_index, FIELD_TO_HEADER['status'], status)
    except Exception as e:
        print(f"  ERROR: Could not write status for registry row {row_index}: {e}")

def provision_row(smart, store, row, config=SHEET_CONFIG):
    """
    Creates the sheet for one registry row and links it back.

    Every failure is written to the row's status and returned as
    {'success': False, 'error': ...}; nothing is raised, so a bulk run can
    continue with the next row.
    """
    row_index = row.row_index
    try:
        try:
            template_url = get_template_url(smart, config, row.template_name)
        except TemplateNotFound as e:
            print(f"  ERROR: Row {row_index}: {e}")
            record_row_error(store, row_index, TEMPLATE_NOT_FOUND_STATUS)
            return {'success': False, 'error': str(e)}

        sheet_name = derive_title(row.template_name, row.owner_label)
        try:
            copy_result = copy_template(smart, template_url, sheet_name, config['holding_folder_name'])
        except (InvalidReference, CopyFailed) as e:
            print(f"  ERROR: Row {row_index}: could not copy template '{row.template_name}': {e}")
            record_row_error(store, row_index, f"Error: {e}")
            return {'success': False, 'error': str(e)}

        store.write_cells(row_index, {
            FIELD_TO_HEADER['linked_sheet_url']: copy_result['sheet_url'],
            FIELD_TO_HEADER['status']: SUCCESS_STATUS,
            FIELD_TO_HEADER['created_at']: date.today().strftime(DATE_FORMAT),
        })
        print(f"  - Row {row_index}: created '{sheet_name}' ({copy_result['sheet_url']})")

        if row.contact_email and '@' in row.contact_email:
            try:
                share_sheet_with_user(smart, copy_result['sheet_id'], row.contact_email,
                                      config.get('share_access_level', 'EDITOR'))
                print(f"  - Row {row_index}: shared with {row.contact_email}")
            except ShareFailed as e:
                print(f"  WARNING: Row {row_index}: {e}")

        install_metric_formulas(smart, store, row_index, copy_result['sheet_id'], config)

        return {
            'success': True,
            'sheet_name': sheet_name,
            'sheet_url': copy_result['sheet_url'],
            'sheet_id': copy_result['sheet_id'],
        }
    except Exception as e:
        print(f"  ERROR: Row {row_index}: unexpected failure: {e}")
        traceback.print_exc()
        record_row_error(store, row_index, f"Error: {e}")
        return {'success': False, 'error': str(e)}

# --- BULK RECONCILER ---

def is_eligible(row):
    return not row.status and bool(row.template_name)

def reconcile_all(smart, store, config=SHEET_CONFIG, delay=ROW_DELAY_SECONDS):
    """
    Provisions every registry row with a template and an empty status.
    Returns {'created': n, 'skipped': n, 'errors': n}. Safe to re-run:
    processed rows always carry a status and are skipped.
    """
    summary = {'created': 0, 'skipped': 0, 'errors': 0}
    rows = store.load_all()
    print(f"Scanning {len(rows)} registry rows...")

    for row in rows:
        if not is_eligible(row):
            summary['skipped'] += 1
            continue

        result = provision_row(smart, store, row, config)
        if result['success']:
            summary['created'] += 1
        else:
            summary['errors'] += 1

        time.sleep(delay)

    return summary

def format_bulk_summary(summary):
    return (
        "Bulk Creation Summary\n"
        "-----------------------\n"
        f"Sheets Created: {summary['created']}\n"
        f"Sheets Skipped: {summary['skipped']}\n"
        f"Errors: {summary['errors']}"
    )

# ============================================================================
# DASHBOARD
# ============================================================================

def project_dashboard(store):
    """Builds one DashboardRecord per provisioned registry row, in row order."""
    records = []
    for row in store.load_all():
        if not row.template_name or not row.linked_sheet_url:
            continue
        records.append(DashboardRecord(
            card_title=derive_title(row.template_name, row.owner_label),
            template_name=row.template_name,
            sheet_url=row.linked_sheet_url,
            **{name: to_metric(getattr(row, name)) for name in METRIC_FIELDS}
        ))
    return records

def format_dashboard(records):
    if not records:
        return "No provisioned sheets found in the registry."

    lines = []
    for record in records:
        lines.append(f"[{record.card_title}] {record.progress}% complete")
        lines.append(f"  Total: {record.total}  Completed: {record.completed}  "
                     f"Pending: {record.pending}  Overdue: {record.overdue}  "
                     f"Not Estimated: {record.not_estimated}")
        lines.append(f"  {record.sheet_url}")

    total = sum(record.total for record in records)
    completed = sum(record.completed for record in records)
    overall = round(completed / total * 100) if total else 0
    lines.append("-" * 40)
    lines.append(f"Sheets: {len(records)}  Tasks: {total}  Completed: {completed}  Overall: {overall}%")
    return "\n".join(lines)

# ============================================================================
# TEMPLATE SHEETS
# ============================================================================

def build_template_row_formulas(headers):
    """
    Formulas for the four calculated columns of a template's sample row.
    Column positions follow the template header layout.
    """
    allocated = f'[{headers[3]}]@row'
    planned = f'[{headers[4]}]@row'
    actual = f'[{headers[5]}]@row'
    has_planned = f'NOT(ISBLANK({planned}))'
    has_both = f'AND({has_planned}, NOT(ISBLANK({actual})))'
    past_due = f'AND({has_planned}, TODAY() > {planned})'
    return {
        headers[8]: (f'=IF({has_both}, IF({actual} <= {planned}, "On Time", "Delayed"), '
                     f'IF({past_due}, "Delayed", "TBD"))'),
        headers[9]: (f'=IF({has_both}, IF({actual} > {planned}, {actual} - {planned}, 0), '
                     f'IF({past_due}, TODAY() - {planned}, 0))'),
        headers[10]: f'=IF(ISBLANK({planned}), "No", "Yes")',
        headers[11]: f'=IF(ISBLANK({allocated}), "", TODAY() - {allocated})',
    }

def create_template_sheet(smart, store, kind, owner_label='', contact_email='', config=SHEET_CONFIG):
    """
    Creates a blank Task or Idea sheet with a sample row, records it in the
    registry as 'Active' and links its metrics.
    """
    template = config['template_kinds'].get(kind)
    if template is None:
        raise SheetManagerError(f"Unknown template kind '{kind}'")

    if not owner_label:
        owner_label = smart.Users.get_current_user().email
    if not contact_email and '@' in owner_label:
        contact_email = owner_label

    headers = template['headers']
    sheet_name = f"{template['label']} - {datetime.now().strftime(TEMPLATE_TIMESTAMP_FORMAT)}"
    created = create_sheet_with_headers(smart, sheet_name, headers, template['date_columns'])
    new_sheet = smart.Sheets.get_sheet(created.id)
    col_map = get_column_map_by_name(new_sheet)

    sample_values = {
        headers[0]: 1,
        headers[1]: template['sample_title'],
        headers[2]: template['sample_description'],
        headers[3]: date.today().strftime(DATE_FORMAT),
        headers[6]: 'Pending',
    }
    sample_row = smartsheet.models.Row({'to_bottom': True, 'cells': []})
    for title, value in sample_values.items():
        sample_row.cells.append(smartsheet.models.Cell({'column_id': col_map[title], 'value': value}))
    for title, formula in build_template_row_formulas(headers).items():
        sample_row.cells.append(smartsheet.models.Cell({'column_id': col_map[title], 'formula': formula}))
    smart.Sheets.add_rows(created.id, [sample_row])
    print(f"  Created '{sheet_name}' (ID: {created.id})")

    sheet_url = new_sheet.permalink
    row_index = store.append_row(RegistryRow(
        template_name=template['label'],
        owner_label=owner_label,
        contact_email=contact_email,
        linked_sheet_url=sheet_url,
        status=TEMPLATE_ACTIVE_STATUS,
        created_at=date.today().strftime(DATE_FORMAT),
    ))
    install_metric_formulas(smart, store, row_index, created.id, config)
    print(f"  Recorded in registry row {row_index}")

    return {'sheet_id': created.id, 'sheet_name': sheet_name, 'sheet_url': sheet_url, 'row_index': row_index}

# --- MAIN DISPATCHER ---

def run_command(smart, command, config=SHEET_CONFIG, kind=None, owner='', email=''):
    print("=" * 80)
    print(f"--- Starting '{command}' ---")
    print("=" * 80)

    try:
        store = RegistryStore.open(smart, config)
        if command == 'provision':
            summary = reconcile_all(smart, store, config)
        elif command == 'dashboard':
            records = project_dashboard(store)
    except Exception as e:
        print(f"FATAL ERROR: Could not read the registry sheet. Halting. Error: {e}")
        return 1

    if command == 'provision':
        print("\n" + format_bulk_summary(summary))
    elif command == 'dashboard':
        print(format_dashboard(records))
    elif command == 'create-template':
        try:
            result = create_template_sheet(smart, store, kind, owner, email, config)
        except Exception as e:
            print(f"ERROR creating {kind} template: {e}")
            return 1
        print(f"\n{result['sheet_name']} created successfully!\nURL: {result['sheet_url']}")
    else:
        print(f"WARNING: Unknown command '{command}'.")
        return 2

    print("=" * 80)
    print(f"--- '{command}' Complete ---")
    print("=" * 80)
    return 0

def build_parser():
    parser = argparse.ArgumentParser(description="Manage sheets tracked in the Sheets_Master registry.")
    commands = parser.add_subparsers(dest='command', required=True)
    commands.add_parser('provision', help="create sheets for every registry row with an empty status")
    commands.add_parser('dashboard', help="print progress for every provisioned sheet")
    template_parser = commands.add_parser('create-template', help="create a blank Task or Idea sheet")
    template_parser.add_argument('kind', choices=sorted(SHEET_CONFIG['template_kinds']))
    template_parser.add_argument('--owner', default='', help="name recorded as 'Shared With'")
    template_parser.add_argument('--email', default='', help="address recorded as 'Email ID'")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)

    access_token = os.getenv('SMARTSHEET_ACCESS_TOKEN')
    if not access_token:
        raise ValueError("FATAL ERROR: SMARTSHEET_ACCESS_TOKEN environment variable not found.")

    smartsheet_client = smartsheet.Smartsheet(access_token)
    smartsheet_client.errors_as_exceptions(True)
    return run_command(smartsheet_client, args.command, SHEET_CONFIG,
                       kind=getattr(args, 'kind', None),
                       owner=getattr(args, 'owner', ''),
                       email=getattr(args, 'email', ''))

if __name__ == '__main__':
    sys.exit(main())
