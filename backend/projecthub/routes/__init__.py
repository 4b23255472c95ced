"""
ProjectHub Backend — API Routes Package
=========================================

What:  HTTP route handlers; thin adapters over the repositories.

Route Inventory:
    - users.py:          /users            CRUD, paginated list
    - user_tokens.py:    /user_tokens      CRUD, paginated list
    - projects.py:       /projects         CRUD, filtered/sorted list
    - project_files.py:  /project_files    CRUD, filtered/sorted list
    - auth.py:           /auth/...         Google sign-in, session user, logout
    - health.py:         /health           database check
    - deps.py:           shared dependencies (ids, pagination, current user)

Routes only parse input, call a repository and shape the response; they
never open transactions of their own.
"""
