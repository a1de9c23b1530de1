from django.urls import path
from . import views

app_name = 'attendance'

urlpatterns = [
    path('mark/', views.MarkAttendanceView.as_view(), name='mark'),
    path('user/<int:user_id>/', views.UserAttendanceView.as_view(), name='user_attendance'),
    path('schedule/<int:schedule_id>/', views.ScheduleAttendanceView.as_view(), name='schedule_attendance'),
]
