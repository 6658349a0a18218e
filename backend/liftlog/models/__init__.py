from liftlog.models.user import User, user_groups
from liftlog.models.exercise_type import ExerciseType
from liftlog.models.exercise import Exercise
from liftlog.models.exercise_set import ExerciseSet
from liftlog.models.comment import Comment
from liftlog.models.group import Group

__all__ = ["User", "user_groups", "ExerciseType", "Exercise", "ExerciseSet", "Comment", "Group"]
