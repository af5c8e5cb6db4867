"""A coworker is a team member with a weekly capacity in hours.

A Coworker can be assigned to any number of Tasks through Assignments
A Coworker keeps an is_active flag, but listing never filters on it
Deleting a Coworker deletes all of their Assignments

"""
from database import db


class Coworker(db.Model):
    __tablename__ = "coworker"

    # PUT only copies these attributes onto an existing row
    UPDATABLE_FIELDS = ("name", "capacity")

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    capacity = db.Column(db.Float, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    assignments = db.relationship(
        "Assignment",
        back_populates="coworker",
        lazy=True,
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "capacity": self.capacity,
            "isActive": self.is_active,
        }

    def __repr__(self):
        return f"<Coworker {self.name}>"
