from django.urls import path
from . import views

app_name = 'projects'

urlpatterns = [
    # Student endpoints
    path('course/<int:course_id>/', views.CourseProjectsView.as_view(), name='course_projects'),
    path('submit/', views.ProjectSubmitView.as_view(), name='submit'),
    path('user-project-statuses/', views.UserProjectStatusesView.as_view(), name='user_project_statuses'),

    # Admin endpoints
    path('all-courses/', views.AdminProjectsView.as_view(), name='all_courses'),
    path('create/', views.ProjectCreateView.as_view(), name='create'),
    path('course/<int:course_id>/submissions/', views.CourseSubmissionsView.as_view(), name='course_submissions'),
    path('review/', views.ProjectReviewView.as_view(), name='review'),
    path('review/<int:submission_id>/video/', views.ReviewVideoUploadView.as_view(), name='review_video'),
    path('list/', views.SubmissionListView.as_view(), name='list'),
]
