# This file marks the services package for API business logic modules.
# Routers and the function handler both depend on the service classes defined here.
