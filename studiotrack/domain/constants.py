"""Enumerations shared by the domain, the models and the routes."""

ADMIN = 'admin'
EDITOR = 'editor'
ASSISTANT = 'assistant'
ROLES = [ADMIN, EDITOR, ASSISTANT]

IN_PROGRESS = 'In Progress'
PAUSED = 'Paused'
FINISHED = 'Finished'
CANCELLED = 'Cancelled'
STATUSES = [IN_PROGRESS, PAUSED, FINISHED, CANCELLED]

# Synthetic filter value, never stored
CRITICAL = 'Critical'
ALL = 'All'

PRIORITIES = ['Low', 'Medium', 'High', 'Urgent']

SIMPLE = 'Simple'
CAMPAIGN = 'Campaign'
COURSE = 'Course'
STRUCTURES = [SIMPLE, CAMPAIGN, COURSE]

FINAL = 'Final'
VERSION_TYPES = ['V1', 'V2', 'V3', FINAL]

UNKNOWN_ROLE = 'Unknown'
REMOVED_USER = 'Removed user'
UNTITLED = 'Untitled'

AVATAR_URL = 'https://ui-avatars.com/api/'
