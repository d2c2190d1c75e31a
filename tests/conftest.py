"""Pytest configuration and fixtures for strapi_typegen tests"""

import pytest
import tempfile
import shutil
from pathlib import Path
import sys

# Add src to path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing"""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def sample_content_types():
    """Trimmed-down Strapi contentTypes.d.ts"""
    return """import type { Schema, Struct } from '@strapi/strapi';

export interface AdminUser extends Struct.CollectionTypeSchema {
  collectionName: 'admin_users';
  info: {
    description: '';
    displayName: 'User';
    name: 'User';
    pluralName: 'users';
    singularName: 'user';
  };
  options: {
    draftAndPublish: false;
  };
  pluginOptions: {
    'content-manager': {
      visible: false;
    };
  };
  attributes: {
    email: Schema.Attribute.Email &
      Schema.Attribute.Required &
      Schema.Attribute.Private &
      Schema.Attribute.Unique &
      Schema.Attribute.SetMinMaxLength<{
        minLength: 6;
      }>;
    password: Schema.Attribute.Password & Schema.Attribute.Private;
  };
}

export interface ApiArticleArticle extends Struct.CollectionTypeSchema {
  collectionName: 'articles';
  info: {
    displayName: 'Article';
    pluralName: 'articles';
    singularName: 'article';
  };
  options: {
    draftAndPublish: true;
  };
  attributes: {
    title: Schema.Attribute.String & Schema.Attribute.Required;
    content: Schema.Attribute.Text;
    status: Schema.Attribute.Enumeration<["draft", "published"]> &
      Schema.Attribute.Required;
    author: Schema.Attribute.Relation<'oneToOne', 'api::author.author'>;
    tags: Schema.Attribute.Relation<'oneToMany', 'api::tag.tag'>;
    metadata: Schema.Attribute.JSON &
      Schema.Attribute.DefaultTo<{}>;
    createdBy: Schema.Attribute.Relation<'oneToOne', 'admin::user'> &
      Schema.Attribute.Private;
  };
}

export interface ApiTagTag extends Struct.CollectionTypeSchema {
  collectionName: 'tags';
  info: {
    displayName: 'Tag';
    pluralName: 'tags';
    singularName: 'tag';
  };
  attributes: {
    name: Schema.Attribute.String &
      Schema.Attribute.Required &
      Schema.Attribute.SetPluginOptions<{
        i18n: {
          localized: true;
        };
      }>;
    color: Schema.Attribute.Enumeration<
      ["red", "green",
        "blue"]
    > & Schema.Attribute.DefaultTo<"red">;
  };
}

declare module '@strapi/strapi' {
  export module Public {
    export interface ContentTypeSchemas {
      'admin::user': AdminUser;
      'api::article.article': ApiArticleArticle;
      'api::tag.tag': ApiTagTag;
    }
  }
}
"""


@pytest.fixture
def expected_article():
    return """export interface ApiArticleArticle {
  title: string;
  content?: string;
  status: "draft" | "published";
  author?: ApiAuthorAuthor;
  tags?: ApiTagTag[];
  metadata?: Record<string, any>;
}"""


@pytest.fixture
def expected_tag():
    return """export interface ApiTagTag {
  name: string;
  color?: "red" | "green" | "blue";
}"""
