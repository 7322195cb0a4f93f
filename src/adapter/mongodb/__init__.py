USERS_COLLECTION_NAME = 'users'
CASES_COLLECTION_NAME = 'cases'
