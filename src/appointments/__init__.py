"""
Appointment domain package.
It holds the fixed code sets, payload validation, row mapping, and SQL access for the `appointments` table.
Transport concerns live under `src.api`; nothing here knows about HTTP.
"""
