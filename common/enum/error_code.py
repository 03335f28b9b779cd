from enum import Enum

class APIError(Enum):
    # 1. 공통 에러
    INTERNAL_SERVER_ERROR = ("C001", "Something went wrong on the server", 500)
    INVALID_INPUT_VALUE  = ("C002", "Invalid input value", 400)
    DB_ERROR = ("C003", "Database operation failed", 500)
    INVALID_ID = ("C004", "Invalid id", 400)
    MISSING_FIELD = ("C005", "Required field is missing", 400)

    # 2. 인증(Auth) 관련
    AUTH_TOKEN_EXPIRED   = ("A001", "Access token has expired", 401)
    AUTH_INVALID_TOKEN   = ("A002", "Invalid access token", 401)
    AUTH_UNAUTHORIZED    = ("A003", "Unauthorized request", 401)
    AUTH_INVALID_PASSWORD = ("A004", "Incorrect password", 401)
    AUTH_INVALID_REFRESH_TOKEN = ("A005", "Invalid refresh token", 401)
    AUTH_REFRESH_TOKEN_REUSED = ("A006", "Refresh token is expired or used", 401)
    AUTH_WRONG_OLD_PASSWORD = ("A007", "Invalid old password", 400)

    # 3. 사용자(User) 관련
    USER_NOT_FOUND       = ("U001", "User does not exist", 404)
    USER_ALREADY_EXISTS  = ("U002", "User with email or username already exists", 409)
    CHANNEL_NOT_FOUND    = ("U003", "Channel does not exist", 404)
    USERNAME_OR_EMAIL_REQUIRED = ("U004", "username or email is required", 400)
    AVATAR_REQUIRED      = ("U005", "Avatar file is required", 400)

    # 4. 영상(Video) 관련
    VIDEO_NOT_FOUND      = ("V001", "Video not found", 404)
    VIDEO_FORBIDDEN      = ("V002", "Only the owner can modify this video", 403)
    VIDEO_FILES_REQUIRED = ("V003", "Title, description, videoFile and thumbnail are required", 400)

    # 5. 댓글(Comment) 관련
    COMMENT_NOT_FOUND    = ("M001", "Comment not found", 404)
    COMMENT_FORBIDDEN    = ("M002", "Only the owner can modify their comment", 403)

    # 6. 트윗(Tweet) 관련
    TWEET_NOT_FOUND      = ("T001", "Tweet not found", 404)
    TWEET_FORBIDDEN      = ("T002", "Only the owner can modify their tweet", 403)

    # 7. 플레이리스트(Playlist) 관련
    PLAYLIST_NOT_FOUND   = ("P001", "Playlist not found", 404)
    PLAYLIST_FORBIDDEN   = ("P002", "Not authorized to modify this playlist", 403)
    PLAYLIST_VIDEO_EXISTS = ("P003", "Video already exists in the playlist", 400)
    PLAYLIST_VIDEO_MISSING = ("P004", "Video does not exist in the playlist", 400)
    PLAYLIST_FIELDS_REQUIRED = ("P005", "Name or description is required", 400)

    # 8. 구독(Subscription) 관련
    SUBSCRIBE_SELF       = ("S001", "You cannot subscribe to your own channel", 400)

    # 9. 미디어(Media) 관련
    MEDIA_UPLOAD_FAILED  = ("F001", "Error while uploading file", 500)
    MEDIA_DELETE_FAILED  = ("F002", "Error while deleting file", 500)

    def __init__(self, code, message, status):
        self.code = code
        self.message = message
        self.status = status
