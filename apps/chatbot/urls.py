from django.urls import path

from . import views

urlpatterns = [
    path('chat/', views.ChatView.as_view(), name='chatbot-chat'),
    path('suggestions/', views.SuggestionsView.as_view(), name='chatbot-suggestions'),
    path('conversation/', views.ConversationView.as_view(), name='chatbot-conversation'),
]
