# ============================================
# tracker/urls.py
# ============================================
from django.urls import path

from tracker.views.auth_view import ForgotPasswordView, LoginView, ResetPasswordView, SignupView
from tracker.views.bug_view import BugDetailView, BugListCreateView, BugReassignView, BugStatusView
from tracker.views.project_view import (
    AssignDevelopersView,
    AssignedProjectListView,
    AssignQAView,
    ProjectDetailView,
    ProjectListCreateView,
)
from tracker.views.user_view import CurrentUserView, ProfileView, UserDetailView, UserListCreateView

app_name = 'tracker'

urlpatterns = [
    # Auth
    path('signup', SignupView.as_view(), name='signup'),
    path('login', LoginView.as_view(), name='login'),
    path('forgot-password', ForgotPasswordView.as_view(), name='forgot-password'),
    path('reset-password', ResetPasswordView.as_view(), name='reset-password'),

    # Users
    path('users/me', CurrentUserView.as_view(), name='user-me'),
    path('users/profile', ProfileView.as_view(), name='user-profile'),
    path('users', UserListCreateView.as_view(), name='user-list-create'),
    path('users/<int:user_id>', UserDetailView.as_view(), name='user-detail'),

    # Projects
    path('projects', ProjectListCreateView.as_view(), name='project-list-create'),
    path('projects/assigned-projects', AssignedProjectListView.as_view(), name='project-assigned'),
    path('assigned-projects', AssignedProjectListView.as_view(), name='assigned-projects'),
    path('projects/<int:project_id>', ProjectDetailView.as_view(), name='project-detail'),
    path('projects/<int:project_id>/assign-qa', AssignQAView.as_view(), name='project-assign-qa'),
    path('projects/<int:project_id>/assign-developers', AssignDevelopersView.as_view(),
         name='project-assign-developers'),

    # Bugs
    path('bugs', BugListCreateView.as_view(), name='bug-list-create'),
    path('bugs/<int:bug_id>', BugDetailView.as_view(), name='bug-detail'),
    path('bugs/<int:bug_id>/status', BugStatusView.as_view(), name='bug-status'),
    path('bugs/<int:bug_id>/reassign', BugReassignView.as_view(), name='bug-reassign'),
]
