from django.urls import path
from . import views

app_name = 'student'

urlpatterns = [
    path('enroll/', views.EnrollView.as_view(), name='enroll'),
    path('assign/', views.AssignCourseView.as_view(), name='assign'),
    path('my-courses/', views.MyCoursesView.as_view(), name='my_courses'),
]
