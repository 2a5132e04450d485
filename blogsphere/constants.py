"""
Fixed vocabularies and user-facing status messages
"""
from enum import Enum

class Category(str, Enum):
    TRAVEL = "travel"
    FOOD = "food"
    LIFESTYLE = "lifestyle"
    FITNESS = "fitness"
    TECHNOLOGY = "technology"
    GAMING = "gaming"
    FASHION = "fashion"
    EDUCATION = "education"
    MUSIC = "music"
    DAILY_ROUTINE = "daily routine"

ALLOWED_CATEGORIES = [category.value for category in Category]
DEFAULT_PREFERENCES = [Category.TECHNOLOGY.value]

class ReactionKind(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"

class BlogMessages:
    BLOG_CREATED = "Blog created successfully."
    BLOG_FETCHED = "Blog fetched successfully."
    ALL_BLOGS_FETCHED = "All blogs fetched successfully."
    LATEST_BLOGS_FETCHED = "Latest blogs fetched successfully."
    BLOG_NOT_FOUND = "Blog not found."
    LIKE_ADDED = "Like added successfully."
    LIKE_REMOVED = "Like removed successfully."
    DISLIKE_ADDED = "Dislike added successfully."
    DISLIKE_REMOVED = "Dislike removed successfully."
    BLOCKED_FROM_BLOG = "You are blocked from interacting with this blog."
    USER_BLOCKED = "User has been successfully blocked from accessing the blog."
    USER_UNBLOCKED = "User has been successfully unblocked from the blog."
    ONLY_AUTHOR_CAN_BLOCK = "Only the author can block users from this blog."
    CANNOT_BLOCK_AUTHOR = "The author cannot be blocked from their own blog."
    REACTION_CONFLICT = "The blog was modified concurrently, please retry."

class MyBlogMessages:
    ALL_BLOGS_FETCHED = "All blogs have been successfully fetched."
    NO_BLOGS_FOUND = "No blogs found for this user."
    BLOG_FETCHED = "Blog fetched successfully."
    BLOG_UPDATED = "Blog has been successfully updated."
    BLOG_DELETED = "Blog has been successfully deleted."
    BLOG_PUBLISHED = "Blog has been successfully published."
    BLOG_UNPUBLISHED = "Blog has been successfully unpublished."

class AuthMessages:
    USER_REGISTERED = "User registered successfully."
    USER_ALREADY_EXISTS = "User already exists."
    USER_LOGGED_IN = "User logged in successfully."
    USER_LOGGED_OUT = "User logged out successfully."
    INVALID_CREDENTIALS = "Invalid credentials."
    TOKEN_REFRESHED = "Access token updated successfully."
    UNAUTHORIZED = "Unauthorized"
    UNAUTHENTICATED = "Could not validate credentials"

class ProfileMessages:
    USER_NOT_FOUND = "User not found"
    PROFILE_FETCHED = "Profile fetched successfully"
    PROFILE_UPDATED = "Profile updated successfully"
    PASSWORD_UPDATED = "Password updated successfully"
    INCORRECT_CURRENT_PASSWORD = "Current password is incorrect"
    PREFERENCES_UPDATED = "Preferences updated successfully."
