# Service layer for the Pico panel
# - servo_client: HTTP client for the device's /servo endpoint
# - servo_toggle: maps a toggle attempt and its outcome to what the page shows
