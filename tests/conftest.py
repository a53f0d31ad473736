"""In-memory stand-in for the Smartsheet client used by sheet_manager."""

import itertools
from types import SimpleNamespace

import pytest

from config import CATALOG_HEADERS, REGISTRY_HEADERS


class FakeCell:
    def __init__(self, column_id, value=None, formula=None):
        self.column_id = column_id
        self.value = value
        self.formula = formula


class FakeRow:
    def __init__(self, row_id, cells):
        self.id = row_id
        self.row_number = None
        self.cells = cells

    def get_column(self, column_id):
        for cell in self.cells:
            if cell.column_id == column_id:
                return cell
        return None


class FakeSheet:
    def __init__(self, sheet_id, name, titles, permalink):
        self.id = sheet_id
        self.name = name
        self.permalink = permalink
        self.columns = []
        self.rows = []
        self._titles = titles


class FakeSheets:
    def __init__(self, backend):
        self.backend = backend

    def get_sheet(self, sheet_id, **kwargs):
        sheet = self.backend.sheets[sheet_id]
        for number, row in enumerate(sheet.rows, start=1):
            row.row_number = number
        return sheet

    def list_sheets(self, include_all=False):
        return SimpleNamespace(data=list(self.backend.sheets.values()))

    def update_rows(self, sheet_id, rows):
        sheet = self.backend.sheets[sheet_id]
        self.backend.update_calls.append((sheet_id, rows))
        for update in rows:
            target = next(row for row in sheet.rows if row.id == update.id)
            for cell in update.cells:
                existing = target.get_column(cell.column_id)
                if existing is None:
                    existing = FakeCell(cell.column_id)
                    target.cells.append(existing)
                if cell.formula:
                    existing.formula = cell.formula
                    existing.value = None
                else:
                    existing.value = cell.value

    def add_rows(self, sheet_id, rows):
        sheet = self.backend.sheets[sheet_id]
        added = []
        for new_row in rows:
            cells = [FakeCell(cell.column_id, cell.value, cell.formula) for cell in new_row.cells]
            row = FakeRow(self.backend.next_id(), cells)
            sheet.rows.append(row)
            row.row_number = len(sheet.rows)
            added.append(row)
        return SimpleNamespace(result=added)

    def copy_sheet(self, sheet_id, destination, include=None):
        if sheet_id in self.backend.copy_failures:
            raise RuntimeError(self.backend.copy_failures[sheet_id])
        source = self.backend.sheets[sheet_id]
        copy = self.backend.add_sheet(destination.new_name, [column.title for column in source.columns])
        self.backend.copies.append((sheet_id, destination.destination_id, copy.id))
        return SimpleNamespace(result=SimpleNamespace(id=copy.id, name=copy.name, permalink=copy.permalink))

    def share_sheet(self, sheet_id, share, send_email=False):
        if self.backend.share_fails:
            raise RuntimeError("Sharing is disabled for this account")
        self.backend.shares.append((sheet_id, share.email))

    def create_cross_sheet_reference(self, sheet_id, reference):
        if (sheet_id, reference.name) in [(target, name) for target, name, _ in self.backend.references]:
            raise RuntimeError(f"Cross-sheet reference name '{reference.name}' already exists")
        self.backend.references.append((sheet_id, reference.name, reference.source_sheet_id))


class FakeHome:
    def __init__(self, backend):
        self.backend = backend

    def create_sheet(self, sheet_obj):
        sheet = self.backend.add_sheet(sheet_obj.name, [column.title for column in sheet_obj.columns])
        return SimpleNamespace(result=sheet)

    def list_folders(self, include_all=False):
        return SimpleNamespace(data=list(self.backend.folders))

    def create_folder(self, folder_obj):
        folder = SimpleNamespace(id=self.backend.next_id(), name=folder_obj.name)
        self.backend.folders.append(folder)
        return SimpleNamespace(result=folder)


class FakeSmartsheet:
    """Keeps sheets in memory and records every copy, share and reference."""

    def __init__(self):
        self._ids = itertools.count(1000)
        self.sheets = {}
        self.folders = []
        self.copies = []
        self.shares = []
        self.references = []
        self.update_calls = []
        self.copy_failures = {}
        self.share_fails = False
        self.Sheets = FakeSheets(self)
        self.Home = FakeHome(self)
        self.Users = SimpleNamespace(
            get_current_user=lambda: SimpleNamespace(email='owner@example.com')
        )

    def next_id(self):
        return next(self._ids)

    def add_sheet(self, name, titles, rows=()):
        sheet_id = self.next_id()
        permalink = f"https://app.smartsheet.com/sheets/tok{sheet_id:027d}"
        sheet = FakeSheet(sheet_id, name, titles, permalink)
        sheet.columns = [SimpleNamespace(id=self.next_id(), title=title) for title in titles]
        self.sheets[sheet_id] = sheet
        for values in rows:
            self.add_row(sheet_id, values)
        return sheet

    def add_row(self, sheet_id, values):
        sheet = self.sheets[sheet_id]
        cells = [FakeCell(column.id, value) for column, value in zip(sheet.columns, values)]
        row = FakeRow(self.next_id(), cells)
        sheet.rows.append(row)
        return row

    def find_sheet(self, name):
        return next(sheet for sheet in self.sheets.values() if sheet.name == name)

    def cell(self, sheet_id, row_number, title):
        sheet = self.Sheets.get_sheet(sheet_id)
        column_id = next(column.id for column in sheet.columns if column.title == title)
        cell = sheet.rows[row_number - 1].get_column(column_id)
        return cell

    def value(self, sheet_id, row_number, title):
        cell = self.cell(sheet_id, row_number, title)
        return cell.value if cell else None


TASK_COLUMNS = [
    'Sr. No', 'Task Title', 'Task Description', 'Allocated Date',
    'Planned Completion Date', 'Actual Completion Date', 'Status',
    'Remarks / Issues', 'On Time / Delayed', 'Delay Days', 'Estimated?',
    'Days Since Allocated',
]


def registry_values(template='', owner='', email='', url='', status='', created='', metrics=()):
    return [template, owner, email, url, status, created] + list(metrics)


@pytest.fixture
def smart():
    return FakeSmartsheet()


@pytest.fixture
def task_template(smart):
    return smart.add_sheet('Task Template', TASK_COLUMNS)


@pytest.fixture
def catalog(smart, task_template):
    return smart.add_sheet('Template_List', CATALOG_HEADERS, rows=[
        ['Task Template', task_template.permalink],
        ['Idea Template', f"https://app.smartsheet.com/sheets/{task_template.id}"],
    ])


@pytest.fixture
def registry(smart):
    return smart.add_sheet('Sheets_Master', REGISTRY_HEADERS)
