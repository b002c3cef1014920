from flask_login import LoginManager
from supabase import create_client
from openai import OpenAI

# 1) A single LoginManager instance you can init on the app
login_manager = LoginManager()

# 2) Small factory to build a Supabase client from config
def init_supabase(config):
    url = config.get("SUPABASE_URL")
    key = config.get("SUPABASE_KEY")
    if not url or not key:
        raise RuntimeError("Missing SUPABASE_URL or SUPABASE_KEY")
    return create_client(url, key)

# 3) Small factory to build an OpenAI client from config
def init_openai(config):
    api_key = config.get("OPENAI_API_KEY")
    if not api_key:
        raise RuntimeError("Missing OPENAI_API_KEY")
    return OpenAI(api_key=api_key)
