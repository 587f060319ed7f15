# Role claims distinguishing the two cookie families.
ADMIN_ROLE = "admin"
USER_ROLE = "user"

# Generic messages only; the failure kind is logged, never returned.
UNAUTHORIZED_MESSAGE = "Unauthorized"
BAD_PASSWORD_MESSAGE = "Invalid password"

ADMIN_LOGIN_PATH = "/admin/login"
ADMIN_LOGOUT_PATH = "/admin/logout"
