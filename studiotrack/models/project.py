"""Project model - the aggregate root.

Deliverables, comments and time logs belong to the project and are stored as
JSON blobs on its row rather than in tables of their own.
"""
from datetime import date, datetime
from studiotrack.extensions import db, JSONType
from studiotrack.domain.records import new_id


def _to_date(value):
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    client = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(100))  # free-text category, e.g. 'TV commercial'
    structure = db.Column(db.String(20), nullable=False)  # Simple, Campaign, Course
    status = db.Column(db.String(20), nullable=False)
    priority = db.Column(db.String(20), nullable=False)
    description = db.Column(db.Text)

    start_date = db.Column(db.Date)
    deadline = db.Column(db.Date)
    version_deadlines = db.Column(JSONType)  # {'v1': ..., 'v2': ..., 'final': ...}

    hours_budgeted = db.Column(db.Float, default=0)
    hours_used = db.Column(db.Float, default=0)

    # Weak references into profiles, not enforced
    editor_ids = db.Column(JSONType)

    deliverables = db.Column(JSONType)
    comments = db.Column(JSONType)
    time_logs = db.Column(JSONType)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'client': self.client,
            'type': self.type or '',
            'structure': self.structure,
            'status': self.status,
            'priority': self.priority,
            'description': self.description or '',
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'deadline': self.deadline.isoformat() if self.deadline else None,
            'version_deadlines': self.version_deadlines or {},
            'hours_budgeted': self.hours_budgeted or 0,
            'hours_used': self.hours_used or 0,
            'editor_ids': self.editor_ids or [],
            'deliverables': self.deliverables or [],
            'comments': self.comments or [],
            'time_logs': self.time_logs or [],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def apply(self, record):
        """Overwrite every column from a project record (whole-aggregate write)."""
        self.id = record['id']
        self.name = record['name']
        self.client = record['client']
        self.type = record.get('type')
        self.structure = record['structure']
        self.status = record['status']
        self.priority = record['priority']
        self.description = record.get('description')
        self.start_date = _to_date(record.get('start_date'))
        self.deadline = _to_date(record.get('deadline'))
        # JSON columns are not mutation-tracked; always assign fresh values
        self.version_deadlines = dict(record.get('version_deadlines') or {})
        self.hours_budgeted = record.get('hours_budgeted') or 0
        self.hours_used = record.get('hours_used') or 0
        self.editor_ids = list(record.get('editor_ids') or [])
        self.deliverables = list(record.get('deliverables') or [])
        self.comments = list(record.get('comments') or [])
        self.time_logs = list(record.get('time_logs') or [])
        return self

    @classmethod
    def from_record(cls, record):
        return cls().apply(record)
