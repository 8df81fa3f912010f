"""Users app package.

Defines the platform account with its role claim (member, staff, admin),
the role-based DRF permissions shared by the other apps and the
registration/login endpoints. Use ``apps.users.models.CustomUser`` as the
AUTH_USER_MODEL throughout the project.
"""
