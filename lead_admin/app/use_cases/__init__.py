"""
Use Cases

Organized by domain folder:
- auth/: Staff sign-in
- leads/: Investor-admin leads
- companies/: Company management
- users/: User management
- investors/: Public submissions

Import from subdirectories.
"""
