from sqlalchemy.orm import declarative_base

# Base for models
Base = declarative_base()
