from django.urls import path
from . import views

app_name = 'courses'

urlpatterns = [
    path('', views.CourseListCreateView.as_view(), name='course_list'),
    path('<int:course_id>/', views.CourseDetailView.as_view(), name='course_detail'),
]
