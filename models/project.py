# models/project.py
from database import db


class Project(db.Model):
    __tablename__ = "project"

    UPDATABLE_FIELDS = ("name",)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    tasks = db.relationship(
        "Task",
        back_populates="project",
        lazy=True,
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return {"id": self.id, "name": self.name}

    def __repr__(self):
        return f"<Project {self.name}>"
