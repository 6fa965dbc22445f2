"""Kanban de instalações: views HTML, API JSON e formulários."""
