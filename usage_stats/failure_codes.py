"""Shared outcome code constants for upload handling."""

CLASSIFIED_MONTHLY = "classified_monthly"
CLASSIFIED_DAILY = "classified_daily"

NO_DATA = "no_data"
FORMAT_UNRECOGNIZED = "format_unrecognized"
NO_USABLE_ROWS = "no_usable_rows"
READ_FAILED = "read_failed"

OUTCOME_MESSAGES = {
    CLASSIFIED_MONTHLY: "Recognized as monthly usage data.",
    CLASSIFIED_DAILY: "Recognized as daily active-user data.",
    NO_DATA: "The spreadsheet has no data.",
    FORMAT_UNRECOGNIZED: "Could not tell whether this spreadsheet is monthly or daily data.",
    NO_USABLE_ROWS: "No rows could be parsed from the spreadsheet.",
    READ_FAILED: "The spreadsheet could not be read or parsed.",
}
