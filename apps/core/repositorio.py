# apps/core/repositorio.py

"""
Acesso remoto aos dados do CRM

Os controladores de quadro e de canvas falam apenas com este contrato
assíncrono de requisição/resposta. Toda falha (validação, permissão,
integridade, banco fora do ar) chega como ErroRemoto com uma mensagem
legível para o usuário.
"""

import logging
from dataclasses import dataclass

from asgiref.sync import sync_to_async
from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from .permissions import PermissoesCRM

logger = logging.getLogger(__name__)


class ErroRemoto(Exception):
    """Falha de uma operação no armazenamento remoto"""

    def __init__(self, mensagem, codigo=None):
        super().__init__(mensagem)
        self.mensagem = mensagem
        self.codigo = codigo


class RepositorioRemoto:
    """
    Contrato do armazenamento remoto

    - buscar: todas as linhas de uma tabela, com filtro e ordenação opcionais
    - atualizar: grava campos na linha de id informado
    - upsert: grava a linha da chave composta, substituindo a existente
    - inserir / remover: cria ou apaga linhas
    """

    async def buscar(self, tabela, filtros=None, ordenar_por='-criado_em'):
        raise NotImplementedError

    async def atualizar(self, tabela, pk, valores):
        raise NotImplementedError

    async def upsert(self, tabela, chave, valores):
        raise NotImplementedError

    async def inserir(self, tabela, valores):
        raise NotImplementedError

    async def remover(self, tabela, filtros):
        raise NotImplementedError


@dataclass(frozen=True)
class Tabela:
    modelo: str
    campo_dono: str
    # Linhas sempre restritas ao próprio usuário, mesmo para gerentes
    sempre_do_usuario: bool = False


TABELAS = {
    'leads': Tabela('core.Lead', 'responsavel'),
    'imoveis': Tabela('core.Imovel', 'criado_por'),
    'captacoes': Tabela('core.Captacao', 'responsavel'),
    'campanhas': Tabela('core.Campanha', 'criado_por'),
    'acoes_campanha': Tabela('core.AcaoCampanha', 'campanha__criado_por'),
    'posicoes_canvas': Tabela('core.PosicaoCanvas', 'usuario', sempre_do_usuario=True),
    'lead_imoveis': Tabela('core.LeadImovel', 'lead__responsavel'),
    'documentos_imovel': Tabela('core.DocumentoImovel', 'captacao__responsavel'),
    'checklist_documentos': Tabela('core.ChecklistDocumento', 'captacao__responsavel'),
}


def serializar(obj):
    """Converte uma instância em dict plano (FKs como <campo>_id)"""
    return {campo.attname: getattr(obj, campo.attname) for campo in obj._meta.concrete_fields}


def mensagem_validacao(erro):
    """Achata um ValidationError numa única mensagem"""
    if hasattr(erro, 'message_dict'):
        partes = []
        for campo, mensagens in erro.message_dict.items():
            prefixo = '' if campo == '__all__' else f'{campo}: '
            partes.append(prefixo + ' '.join(mensagens))
        return '; '.join(partes)
    return ' '.join(erro.messages)


class RepositorioDjango(RepositorioRemoto):
    """
    Implementação do contrato sobre o ORM do Django

    Aplica o escopo por usuário (equivalente às políticas de linha):
    corretores só enxergam e alteram os próprios registros, gerentes
    enxergam tudo, exceto as posições de canvas que são sempre pessoais.
    """

    def __init__(self, usuario, adaptador=sync_to_async):
        self.usuario = usuario
        # Views ficam na transação da requisição (sync_to_async); consumers
        # de longa duração passam database_sync_to_async
        self.adaptador = adaptador

    # === CONTRATO ASSÍNCRONO ===

    async def buscar(self, tabela, filtros=None, ordenar_por='-criado_em'):
        return await self.adaptador(self._executar)(self._buscar, tabela, filtros, ordenar_por)

    async def atualizar(self, tabela, pk, valores):
        return await self.adaptador(self._executar)(self._atualizar, tabela, pk, valores)

    async def upsert(self, tabela, chave, valores):
        return await self.adaptador(self._executar)(self._upsert, tabela, chave, valores)

    async def inserir(self, tabela, valores):
        return await self.adaptador(self._executar)(self._inserir, tabela, valores)

    async def remover(self, tabela, filtros):
        return await self.adaptador(self._executar)(self._remover, tabela, filtros)

    # === IMPLEMENTAÇÃO SÍNCRONA ===

    def _executar(self, operacao, tabela, *args):
        """Cada operação roda no próprio savepoint e falhas viram ErroRemoto"""
        try:
            with transaction.atomic():
                return operacao(tabela, *args)
        except ErroRemoto:
            raise
        except ValidationError as e:
            raise ErroRemoto(mensagem_validacao(e), codigo='validacao') from e
        except IntegrityError as e:
            logger.warning(f"⚠️ Violação de integridade em {tabela}: {e}")
            raise ErroRemoto('Registro duplicado ou referência inválida', codigo='integridade') from e
        except (DatabaseError, ValueError, TypeError) as e:
            logger.error(f"❌ Erro ao acessar {tabela}: {e}")
            raise ErroRemoto(str(e), codigo='banco') from e

    def _tabela(self, tabela):
        try:
            return TABELAS[tabela]
        except KeyError:
            raise ErroRemoto(f'Tabela desconhecida: {tabela}', codigo='tabela')

    def _restrito(self, config):
        return not PermissoesCRM.ve_todos_registros(self.usuario, config.sempre_do_usuario)

    def _queryset(self, tabela):
        config = self._tabela(tabela)
        modelo = apps.get_model(config.modelo)
        queryset = modelo.objects.all()
        if self._restrito(config):
            queryset = queryset.filter(**{config.campo_dono: self.usuario})
        return queryset

    def _verificar_dono(self, config, obj):
        """Garante que uma linha nova pertence ao usuário (quando restrito)"""
        if not self._restrito(config):
            return
        dono = obj
        for parte in config.campo_dono.split('__'):
            dono = getattr(dono, parte, None)
            if dono is None:
                break
        if dono is None or dono.pk != self.usuario.pk:
            raise ErroRemoto('Sem permissão para gravar este registro', codigo='permissao')

    def _buscar(self, tabela, filtros, ordenar_por):
        queryset = self._queryset(tabela).filter(**(filtros or {}))
        if ordenar_por:
            queryset = queryset.order_by(ordenar_por)
        return [serializar(obj) for obj in queryset]

    def _atualizar(self, tabela, pk, valores):
        queryset = self._queryset(tabela)
        try:
            obj = queryset.get(pk=pk)
        except (queryset.model.DoesNotExist, ValueError):
            raise ErroRemoto('Registro não encontrado ou sem permissão', codigo='nao_encontrado')

        for campo, valor in valores.items():
            setattr(obj, campo, valor)

        obj.full_clean()
        obj.save()
        logger.info(f"✏️ {tabela}#{pk} atualizado por {self.usuario.username}: {sorted(valores)}")
        return serializar(obj)

    def _inserir(self, tabela, valores):
        config = self._tabela(tabela)
        modelo = apps.get_model(config.modelo)
        valores = dict(valores)

        if '__' not in config.campo_dono:
            valores.setdefault(f'{config.campo_dono}_id', self.usuario.pk)

        obj = modelo(**valores)
        obj.full_clean()
        self._verificar_dono(config, obj)
        obj.save()
        logger.info(f"➕ {tabela}#{obj.pk} criado por {self.usuario.username}")
        return serializar(obj)

    def _upsert(self, tabela, chave, valores):
        config = self._tabela(tabela)
        modelo = apps.get_model(config.modelo)
        chave = dict(chave)

        if '__' not in config.campo_dono:
            campo_id = f'{config.campo_dono}_id'
            chave.setdefault(campo_id, self.usuario.pk)
            if self._restrito(config) and str(chave[campo_id]) != str(self.usuario.pk):
                raise ErroRemoto('Sem permissão para gravar este registro', codigo='permissao')

        # Dentro do savepoint de _executar: a recusa do dono desfaz a gravação
        obj, criado = modelo.objects.update_or_create(defaults=valores, **chave)
        self._verificar_dono(config, obj)

        logger.debug(f"📌 upsert {tabela}#{obj.pk} ({'novo' if criado else 'atualizado'})")
        return serializar(obj)

    def _remover(self, tabela, filtros):
        if not filtros:
            raise ErroRemoto('Remoção sem filtro não é permitida', codigo='filtro')

        queryset = self._queryset(tabela).filter(**filtros)
        _, por_modelo = queryset.delete()
        removidos = por_modelo.get(queryset.model._meta.label, 0)
        logger.info(f"🗑️ {removidos} linha(s) removida(s) de {tabela} por {self.usuario.username}")
        return removidos
