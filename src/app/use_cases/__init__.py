"""
Use Cases

Organized into domain folders:
- auth/: Signup, signin and password reset flows
- users/: Current user profile
- admin/: Role and permission administration
"""
