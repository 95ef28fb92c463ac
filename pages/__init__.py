from .records_page import page_records, records_table
from .record_form_page import page_record_form

__all__ = ["page_records", "records_table", "page_record_form"]
