APP_NAME = "kvstore"
JSON_SUFFIX = ".json"
