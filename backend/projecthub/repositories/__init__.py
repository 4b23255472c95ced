"""
ProjectHub Backend — Repositories
===================================

Repository Inventory:
    - base.py:     Repository (find_by_id, find_all, create, update, delete_by_id)
    - users.py:    UserRepository (upsert on `sub`), ActiveTokenRepository
    - projects.py: ProjectRepository, ProjectFileRepository
"""
