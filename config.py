# config.py

# ============================================================================
# SHEETS MASTER REGISTRY CONFIGURATION
# ============================================================================
# This configuration defines the registry ("Sheets_Master") sheet, the
# template catalog and the templates used by the sheet manager.
#
# ARCHITECTURE OVERVIEW:
# - registry_sheet_id / registry_sheet_name: the central registry, one row per
#   managed child sheet. Looked up by ID first, then by name, and created with
#   REGISTRY_HEADERS when neither exists.
# - catalog_sheet_id / catalog_sheet_name: two-column lookup table mapping a
#   template name to the URL of the sheet that gets copied.
# - holding_folder_name: folder that receives every provisioned copy.
#
# ROW LIFECYCLE:
# - A registry row with an empty 'Sheet Status' and a non-empty
#   'Sheet Template' is eligible for provisioning.
# - Provisioning always leaves a non-empty status (success or 'Error: ...'),
#   so a second run skips the row.
#
# METRIC COLUMNS:
# - The last six registry columns hold live formulas that read the child
#   sheet through cross-sheet references. The script writes the formulas,
#   Smartsheet computes the values.
# - metric_source_columns lists candidate column titles in the child sheet.
#   The first title present in the copied sheet is used, so Task and Idea
#   templates share the same formulas.
#
# CREDENTIALS:
# - SMARTSHEET_ACCESS_TOKEN is read from the environment only.
# ============================================================================

# Delay between provisioned rows, in seconds (API rate limits)
ROW_DELAY_SECONDS = 0.1

DATE_FORMAT = '%Y-%m-%d'
TEMPLATE_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M'

SUCCESS_STATUS = 'Sheet created successfully'
TEMPLATE_NOT_FOUND_STATUS = 'Error: Template not found'
TEMPLATE_ACTIVE_STATUS = 'Active'

# Status values counted as "completed" by the metric formulas
COMPLETION_STATUSES = ['Completed', 'Done', 'Closed', 'Complete']

# Canonical 12-column registry header, in column order
REGISTRY_HEADERS = [
    'Sheet Template',
    'Shared With',
    'Email ID',
    'Sheet URL',
    'Sheet Status',
    'Date Created',
    'Total Tasks',
    'Completed Tasks',
    'Pending Tasks',
    'Overdue Tasks',
    'Not Estimated',
    'Progress %',
]

CATALOG_HEADERS = ['Template Name', 'Template URL']

SHEET_CONFIG = {
    # Leave the IDs as None to locate (or create) the sheets by name
    'registry_sheet_id': None,
    'registry_sheet_name': 'Sheets_Master',
    'catalog_sheet_id': None,
    'catalog_sheet_name': 'Template_List',
    'holding_folder_name': 'Created_Sheets',
    'share_access_level': 'EDITOR',
    'metric_source_columns': {
        'title': ['Task Title', 'Idea Title'],
        'status': ['Status'],
        'due_date': ['Planned Completion Date', 'Planned Implementation Date'],
        'estimated': ['Estimated?'],
    },
    # ====================================================================
    # TEMPLATE SHEETS
    # Blank templates created by the 'create-template' command
    # ====================================================================
    'template_kinds': {
        'task': {
            'label': 'Task Template',
            'headers': [
                'Sr. No', 'Task Title', 'Task Description', 'Allocated Date',
                'Planned Completion Date', 'Actual Completion Date',
                'Status', 'Remarks / Issues', 'On Time / Delayed',
                'Delay Days', 'Estimated?', 'Days Since Allocated',
            ],
            'date_columns': [
                'Allocated Date', 'Planned Completion Date', 'Actual Completion Date',
            ],
            'sample_title': 'Sample Task',
            'sample_description': 'This is a sample task description',
        },
        'idea': {
            'label': 'Idea Template',
            'headers': [
                'Sr. No', 'Idea Title', 'Idea Description', 'Idea Date',
                'Planned Implementation Date', 'Actual Implementation Date',
                'Status', 'Remarks / Issues', 'On Time / Delayed',
                'Delay Days', 'Estimated?', 'Days Since Allocated',
            ],
            'date_columns': [
                'Idea Date', 'Planned Implementation Date', 'Actual Implementation Date',
            ],
            'sample_title': 'Sample Idea',
            'sample_description': 'This is a sample idea description',
        },
    },
}
