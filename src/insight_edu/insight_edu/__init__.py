"""insight_edu package.

Attendance bookkeeping for students: a pure calculator shared by the offline
sync job and the live dashboard, plus service/repository layers around it.
"""
