# This file marks the routers package for API route modules.
# Appointment CRUD routes and operational health routes live in separate modules.
