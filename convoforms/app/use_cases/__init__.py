"""
Use Cases

Organized by area:
- workspaces/: provisioning, settings, usage, activity feed
- members/: member listing and management
- invitations/: invitation lifecycle
- forms/: gated form CRUD
- templates/: template browsing, cloning and form creation
- admin/: billing and support operations
"""
