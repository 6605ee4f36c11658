""" Test package for steno lookup. __init__.py loads common test resources. """

import json
import os

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")

MAIN_DICT_PATH = os.path.join(DATA_DIR, "main.json")
USER_DICT_PATH = os.path.join(DATA_DIR, "user.json")
BAD_JSON_PATH = os.path.join(DATA_DIR, "bad.json")
NOT_OBJECT_PATH = os.path.join(DATA_DIR, "not_object.json")
PLOVER_CFG_PATH = os.path.join(DATA_DIR, "plover.cfg")

with open(MAIN_DICT_PATH, encoding='utf-8') as fp:
    TEST_MAIN_DICT = json.load(fp)
with open(USER_DICT_PATH, encoding='utf-8') as fp:
    TEST_USER_DICT = json.load(fp)
