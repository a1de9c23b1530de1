from django.urls import path
from . import views

app_name = 'schedule'

urlpatterns = [
    path('daily/<int:course_id>/', views.DailyScheduleView.as_view(), name='daily'),
    path('weekly/<int:course_id>/', views.WeeklyScheduleView.as_view(), name='weekly'),
    path('add/', views.ScheduleCreateView.as_view(), name='add'),
    path('<int:schedule_id>/', views.ScheduleDetailView.as_view(), name='detail'),
]
