import logging

log = logging.getLogger("invoice_service")
