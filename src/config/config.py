"""Configuration settings for the spreadsheet reader."""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Google Sheets Endpoints ---
# Public CSV download produced by 'File -> Share -> Publish to web'
EXPORT_URL_TEMPLATE = "https://docs.google.com/spreadsheets/d/e/{spreadsheet_id}/pub?output=csv"
# Sheets API v4 values endpoint; the '!{range}' part is only added when a range is given
API_URL_TEMPLATE = "https://sheets.googleapis.com/v4/spreadsheets/{spreadsheet_id}/values/{target}?{query}"

# --- Sheets API Access ---
# Key created in the Google developer console (APIs & Services -> Credentials)
SHEETS_API_KEY = os.getenv('SHEETS_API_KEY')

# --- HTTP Settings ---
DEFAULT_REQUEST_TIMEOUT = 15 # seconds
DEFAULT_USER_AGENT = 'gspreadsheet-reader/1.0'
SHEETS_REQUEST_TIMEOUT = os.getenv('SHEETS_REQUEST_TIMEOUT', str(DEFAULT_REQUEST_TIMEOUT))
SHEETS_USER_AGENT = os.getenv('SHEETS_USER_AGENT', DEFAULT_USER_AGENT)

# --- Logging ---
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# --- Payload Formats ---
FORMAT_CSV = 'csv'
FORMAT_JSON = 'json'
