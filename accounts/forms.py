from django import forms
from django.contrib.auth import get_user_model

from .models import ROLE_CHOICES


class RegisterForm(forms.Form):
    name = forms.CharField(max_length=255)
    email = forms.EmailField()
    password = forms.CharField(min_length=6)


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField()


class ProfileForm(forms.Form):
    name = forms.CharField(max_length=255, required=False)
    email = forms.EmailField(required=False)
    password = forms.CharField(min_length=6, required=False)

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = user

    def clean_email(self):
        email = self.cleaned_data.get("email")
        if not email:
            return email
        User = get_user_model()
        taken = User.objects.filter(email__iexact=email)
        if self.user is not None:
            taken = taken.exclude(pk=self.user.pk)
        if taken.exists():
            raise forms.ValidationError("User with this email already exists")
        return email


class RoleForm(forms.Form):
    role = forms.ChoiceField(choices=ROLE_CHOICES)
