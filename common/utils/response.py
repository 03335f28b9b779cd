def api_response(data=None, message='Success', status_code=200):
    return {
        "statusCode": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400
    }
