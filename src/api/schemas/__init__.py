# This file marks the schemas package for API request and response models.
# Appointment, envelope, and health contracts are imported from their own modules.
